"""Wire formats: query parameters out, MessagePack quote response in."""

from titan_swap.wire.decoder import decode_swap_quotes
from titan_swap.wire.params import build_query_params
from titan_swap.wire.schema import (
    AccountMetaData,
    InstructionData,
    PlatformFeeData,
    RoutePlanStepData,
    SwapQuotes,
    SwapRoute,
)

__all__ = [
    "decode_swap_quotes",
    "build_query_params",
    # Decoded records
    "SwapQuotes",
    "SwapRoute",
    "RoutePlanStepData",
    "InstructionData",
    "AccountMetaData",
    "PlatformFeeData",
]
