"""Decoder for the MessagePack quote response."""

import logging

import msgpack
from pydantic import ValidationError

from titan_swap.errors import DecodeError
from titan_swap.wire.schema import SwapQuotes

logger = logging.getLogger(__name__)


def _error_path(loc: tuple) -> str:
    """Render a pydantic error location as a dotted path (quotes.r.steps[0].ammKey)."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def decode_swap_quotes(buffer: bytes) -> SwapQuotes:
    """Decode a quote response body.

    Args:
        buffer: Raw response body

    Returns:
        SwapQuotes with routes in wire order

    Raises:
        DecodeError: If the buffer is not valid MessagePack or does not match
            the response layout
    """
    try:
        payload = msgpack.unpackb(buffer, raw=False, strict_map_key=False)
    except msgpack.ExtraData as e:
        raise DecodeError("trailing data after response") from e
    except (msgpack.UnpackException, ValueError, TypeError) as e:
        raise DecodeError(f"invalid msgpack: {e}") from e

    try:
        quotes = SwapQuotes.model_validate(payload)
    except ValidationError as e:
        error = e.errors()[0]
        raise DecodeError(error["msg"], _error_path(error["loc"]) or None) from e

    logger.debug(f"Decoded quote {quotes.id}: {len(quotes.quotes)} route(s) from {len(buffer)} bytes")
    return quotes
