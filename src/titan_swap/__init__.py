"""Titan swap API client.

Quote a token pair, decode the MessagePack route and build the swap
instructions for signing with the Solana SDK.
"""

from titan_swap.client import TitanClient
from titan_swap.contracts import (
    PlatformFee,
    QuoteRequest,
    QuoteResponse,
    RoutePlanStep,
    SwapInfo,
    SwapMode,
    SwapResponse,
)
from titan_swap.errors import (
    DecodeError,
    NoRoutesAvailableError,
    RequestFailedError,
    TitanClientError,
    TransportError,
)
from titan_swap.transcoder import select_best_out_amount, select_first_route

__version__ = "0.1.0"

__all__ = [
    # Client
    "TitanClient",
    # Contracts
    "SwapMode",
    "QuoteRequest",
    "QuoteResponse",
    "PlatformFee",
    "SwapInfo",
    "RoutePlanStep",
    "SwapResponse",
    # Route selection
    "select_first_route",
    "select_best_out_amount",
    # Errors
    "TitanClientError",
    "TransportError",
    "RequestFailedError",
    "NoRoutesAvailableError",
    "DecodeError",
]
