"""Pydantic models of the binary (MessagePack) quote response.

The service encodes each record either as a map keyed by camelCase field
names or as a positional array in declaration order. Both forms validate to
the same record. Optional fields may be absent from maps, nil, or left off
the end of an array; they decode to None.

Addresses stay as raw 32-byte strings here. Conversion to Pubkey happens in
the transcoder.
"""

from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictBytes,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

from titan_swap.contracts.quote import SwapMode

ADDRESS_LENGTH = 32


def _uint(bits: int):
    return Annotated[int, Field(strict=True, ge=0, le=(1 << bits) - 1)]


U8 = _uint(8)
U16 = _uint(16)
U32 = _uint(32)
U64 = _uint(64)


def _coerce_bytes(value: Any) -> Any:
    # Byte strings may arrive as bin or as an array of u8
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
                raise ValueError(f"expected u8 at index {index}, got {item!r}")
        return bytes(value)
    return value


def _check_address_length(value: bytes) -> bytes:
    if len(value) != ADDRESS_LENGTH:
        raise ValueError(f"expected {ADDRESS_LENGTH}-byte address, got {len(value)} bytes")
    return value


def _parse_swap_mode(value: Any) -> Any:
    if isinstance(value, SwapMode):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected swap mode string, got {type(value).__name__}")
    return SwapMode.parse(value)


Blob = Annotated[StrictBytes, BeforeValidator(_coerce_bytes)]
Address = Annotated[StrictBytes, BeforeValidator(_coerce_bytes), AfterValidator(_check_address_length)]
WireSwapMode = Annotated[SwapMode, BeforeValidator(_parse_swap_mode)]


class WireRecord(BaseModel):
    """Base for decoded records: camelCase keys, immutable, positional arrays allowed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _from_positional(cls, data: Any) -> Any:
        if isinstance(data, (dict, cls)):
            return data
        if not isinstance(data, (list, tuple)):
            raise ValueError(f"expected {cls.__name__} map or array, got {type(data).__name__}")

        fields = list(cls.model_fields.items())
        if len(data) > len(fields):
            raise ValueError(f"{cls.__name__} has {len(fields)} fields, got array of {len(data)}")
        # Trailing fields left off the array stay absent
        return {(info.alias or to_camel(name)): value for (name, info), value in zip(fields, data)}


class PlatformFeeData(WireRecord):
    amount: U64
    fee_bps: U8 = Field(alias="fee_bps")


class AccountMetaData(WireRecord):
    pubkey: Address = Field(alias="p")
    is_signer: StrictBool = Field(alias="s")
    is_writable: StrictBool = Field(alias="w")


class InstructionData(WireRecord):
    program_id: Address = Field(alias="p")
    accounts: tuple[AccountMetaData, ...] = Field(alias="a")
    data: Blob = Field(alias="d")


class RoutePlanStepData(WireRecord):
    """One hop of a decoded route."""

    amm_key: Address
    label: StrictStr
    input_mint: Address
    output_mint: Address
    in_amount: U64
    out_amount: U64
    alloc_ppb: U32
    fee_mint: Optional[Address] = None
    fee_amount: Optional[U64] = None
    context_slot: Optional[U64] = None


class SwapRoute(WireRecord):
    """A route as sent by the service, before any transcoding."""

    in_amount: U64
    out_amount: U64
    slippage_bps: U16
    platform_fee: Optional[PlatformFeeData] = None
    steps: tuple[RoutePlanStepData, ...]
    instructions: tuple[InstructionData, ...]
    address_lookup_tables: tuple[Address, ...]
    context_slot: Optional[U64] = None
    time_taken_ns: Optional[U64] = None
    expires_at_ms: Optional[U64] = None
    expires_after_slot: Optional[U64] = None
    compute_units: Optional[U64] = None
    compute_units_safe: Optional[U64] = None
    transaction: Optional[Blob] = None
    reference_id: Optional[StrictStr] = None


class SwapQuotes(WireRecord):
    """Top-level quote response: alternative routes keyed by opaque id, in wire order."""

    id: StrictStr
    input_mint: Address
    output_mint: Address
    swap_mode: WireSwapMode
    amount: U64
    quotes: dict[StrictStr, SwapRoute]
