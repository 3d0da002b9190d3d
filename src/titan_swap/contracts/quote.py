"""Quote request and response contracts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from solders.pubkey import Pubkey

if TYPE_CHECKING:
    from titan_swap.wire.schema import SwapRoute

U16_MAX = (1 << 16) - 1
U64_MAX = (1 << 64) - 1


class SwapMode(str, Enum):
    """Which side of the swap the request amount fixes."""

    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"

    @classmethod
    def default(cls) -> "SwapMode":
        return cls.EXACT_IN

    @classmethod
    def parse(cls, text: str) -> "SwapMode":
        """Parse the exact wire token ("ExactIn" or "ExactOut")."""
        for mode in cls:
            if mode.value == text:
                return mode
        raise ValueError(f"{text} is not a valid SwapMode")

    def __str__(self) -> str:
        return self.value


class QuoteRequest(BaseModel):
    """Request for a swap quote.

    Address fields accept a Pubkey or its base58 string. Amounts are in the
    smallest unit of the input token.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    input_mint: Pubkey = Field(..., description="Mint of the token being sold")
    output_mint: Pubkey = Field(..., description="Mint of the token being bought")
    amount: int = Field(..., ge=0, le=U64_MAX, description="Amount in smallest units")
    user_pubkey: Pubkey = Field(..., description="Wallet that will sign the swap")
    max_accounts: Optional[int] = Field(None, ge=0, description="Total account limit")
    swap_mode: Optional[SwapMode] = Field(None, description="ExactIn or ExactOut")
    slippage_bps: int = Field(0, ge=0, le=U16_MAX, description="Slippage in basis points")
    only_direct_routes: Optional[bool] = Field(None, description="Single-hop routes only")
    excluded_dexes: Optional[str] = Field(None, description="Comma-separated venues to skip")
    size_constraints: Optional[int] = Field(None, ge=0, le=U64_MAX)
    accounts_limit_writable: Optional[int] = Field(None, ge=0, le=U64_MAX)
    providers: Optional[str] = Field(None, description="Comma-separated preferred providers")

    @field_validator("input_mint", "output_mint", "user_pubkey", mode="before")
    @classmethod
    def _parse_pubkey(cls, value):
        if isinstance(value, str):
            return Pubkey.from_string(value)
        return value

    @field_validator("swap_mode", mode="before")
    @classmethod
    def _parse_swap_mode(cls, value):
        if isinstance(value, str) and not isinstance(value, SwapMode):
            return SwapMode.parse(value)
        return value


@dataclass(frozen=True)
class PlatformFee:
    """Platform fee charged on the route."""

    amount: int
    fee_bps: int

    def to_dict(self) -> dict:
        return {"amount": str(self.amount), "feeBps": self.fee_bps}


@dataclass(frozen=True)
class SwapInfo:
    """One venue hop of a route plan."""

    amm_key: Pubkey
    label: str
    input_mint: Pubkey
    output_mint: Pubkey
    in_amount: int
    out_amount: int
    alloc_ppb: int = 0
    fee_mint: Pubkey = field(default_factory=Pubkey.default)
    fee_amount: int = 0
    context_slot: int = 0

    def to_dict(self) -> dict:
        return {
            "ammKey": str(self.amm_key),
            "label": self.label,
            "inputMint": str(self.input_mint),
            "outputMint": str(self.output_mint),
            "inAmount": str(self.in_amount),
            "outAmount": str(self.out_amount),
            "allocPpb": self.alloc_ppb,
            "feeMint": str(self.fee_mint),
            "feeAmount": str(self.fee_amount),
            "contextSlot": self.context_slot,
        }


@dataclass(frozen=True)
class RoutePlanStep:
    """A route plan entry.

    percent is always 100: only one route is surfaced, so it is not derived
    from alloc_ppb. Display code wanting the real split should read
    swap_info.alloc_ppb.
    """

    swap_info: SwapInfo
    percent: int = 100

    def to_dict(self) -> dict:
        return {"swapInfo": self.swap_info.to_dict(), "percent": self.percent}


@dataclass(frozen=True)
class QuoteResponse:
    """A quote ready for display, carrying the raw route for the swap step."""

    input_mint: Pubkey
    in_amount: int
    output_mint: Pubkey
    out_amount: int
    swap_mode: SwapMode
    slippage_bps: int
    platform_fee: Optional[PlatformFee]
    route_plan: tuple[RoutePlanStep, ...]
    raw_route: "SwapRoute" = field(repr=False, compare=False)
    context_slot: Optional[int] = None
    time_taken: Optional[float] = None  # seconds
    quote_id: Optional[str] = None
    route_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the camelCase display form (raw route excluded).

        error and errorCode only appear when set.
        """
        data = {
            "inputMint": str(self.input_mint),
            "inAmount": str(self.in_amount),
            "outputMint": str(self.output_mint),
            "outAmount": str(self.out_amount),
            "swapMode": str(self.swap_mode),
            "slippageBps": self.slippage_bps,
            "platformFee": self.platform_fee.to_dict() if self.platform_fee else None,
            "routePlan": [step.to_dict() for step in self.route_plan],
            "contextSlot": self.context_slot,
            "timeTaken": self.time_taken,
        }
        if self.error is not None:
            data["error"] = self.error
        if self.error_code is not None:
            data["errorCode"] = self.error_code
        return data
