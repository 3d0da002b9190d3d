"""Public request and response contracts of the swap client."""

from titan_swap.contracts.quote import (
    PlatformFee,
    QuoteRequest,
    QuoteResponse,
    RoutePlanStep,
    SwapInfo,
    SwapMode,
)
from titan_swap.contracts.swap import SwapResponse

__all__ = [
    # Quote contracts
    "SwapMode",
    "QuoteRequest",
    "QuoteResponse",
    "PlatformFee",
    "SwapInfo",
    "RoutePlanStep",
    # Swap contracts
    "SwapResponse",
]
