"""Titan swap API client.

Requests a route for a token pair, decodes the MessagePack response and
builds the swap instructions. Signing and submission are left to the caller.

Usage:
    client = TitanClient(auth_token="...")
    quote = await client.quote(request)
    swap = client.build_swap(quote)
"""

import logging
from typing import Optional, Union

import httpx

from titan_swap.config import TITAN_API_URL, Settings, get_settings
from titan_swap.contracts.quote import QuoteRequest, QuoteResponse
from titan_swap.contracts.swap import SwapResponse
from titan_swap.errors import TransportError, classify_error_response
from titan_swap.transcoder import RouteSelector, select_first_route, transcode_quote, transcode_swap
from titan_swap.wire.decoder import decode_swap_quotes
from titan_swap.wire.params import build_query_params
from titan_swap.wire.schema import SwapQuotes

logger = logging.getLogger(__name__)

QUOTE_SWAP_PATH = "/api/v1/quote/swap"
MSGPACK_CONTENT_TYPE = "application/vnd.msgpack"


class TitanClient:
    """Client for the Titan quote/swap API.

    Every network call opens its own HTTP client, so one instance can be
    shared between concurrent tasks.
    """

    def __init__(
        self,
        auth_token: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        selector: RouteSelector = select_first_route,
    ):
        """Initialize the client.

        Args:
            auth_token: Bearer token for the API
            base_url: API base URL override (defaults to the public endpoint)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (mock transports in tests)
            selector: Route selection strategy used by quote()
        """
        if not auth_token or not auth_token.strip():
            raise ValueError("auth_token must not be empty")

        self.base_url = (base_url or TITAN_API_URL).rstrip("/")
        self.timeout = timeout
        self.selector = selector
        self._transport = transport
        self._auth_header = f"Bearer {auth_token}"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "TitanClient":
        """Create a client from TITAN_* settings."""
        settings = settings or get_settings()
        return cls(
            auth_token=settings.auth_token,
            base_url=settings.base_url,
            timeout=settings.timeout,
            **kwargs,
        )

    def _get_headers(self) -> dict:
        return {
            "Accept": MSGPACK_CONTENT_TYPE,
            "Authorization": self._auth_header,
        }

    async def fetch_swap_quotes(self, request: QuoteRequest) -> SwapQuotes:
        """Request routes and return the decoded response with every route.

        Raises:
            TransportError: On connection, TLS or timeout failures
            NoRoutesAvailableError: If the service reports no route
            RequestFailedError: On any other non-2xx response
            DecodeError: If the body does not match the response layout
        """
        params = build_query_params(request)
        url = f"{self.base_url}{QUOTE_SWAP_PATH}"
        logger.debug(f"Requesting quote: {url} {params}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers=self._get_headers())
                body = await response.aread()
        except httpx.HTTPError as e:
            logger.error(f"Titan transport error: {type(e).__name__}: {e}")
            raise TransportError(f"HTTP client error: {e}") from e

        if not response.is_success:
            text = body.decode("utf-8", errors="replace")
            logger.warning(f"Titan API error: {response.status_code} - {text}")
            raise classify_error_response(response.status_code, text)

        return decode_swap_quotes(body)

    async def quote(self, request: QuoteRequest) -> QuoteResponse:
        """Get a quote for the request using the configured route selector.

        Raises:
            NoRoutesAvailableError: If no route is available
            TransportError, RequestFailedError, DecodeError: See fetch_swap_quotes
        """
        quotes = await self.fetch_swap_quotes(request)
        quote = transcode_quote(quotes, request, selector=self.selector)

        logger.info(
            f"Quote {quote.quote_id}: {quote.in_amount} {quote.input_mint} -> "
            f"{quote.out_amount} {quote.output_mint} "
            f"({quote.slippage_bps} bps slippage, {len(quote.route_plan)} step(s))"
        )
        return quote

    def build_swap(self, quote: QuoteResponse) -> SwapResponse:
        """Build swap instructions from a previous quote without a new request.

        Raises:
            NoRoutesAvailableError: If the quoted route has no instructions
        """
        swap = transcode_swap(quote)
        logger.info(
            f"Swap for quote {quote.quote_id}: {len(swap.instructions)} instruction(s), "
            f"{swap.compute_unit_limit} CU limit, "
            f"{len(swap.address_lookup_table_addresses)} lookup table(s)"
        )
        return swap

    async def swap(self, target: Union[QuoteRequest, QuoteResponse]) -> SwapResponse:
        """Build swap instructions.

        Args:
            target: A QuoteResponse to reuse, or a QuoteRequest to quote first

        Returns:
            SwapResponse ready for transaction assembly

        Raises:
            TypeError: If target is neither a QuoteRequest nor a QuoteResponse
        """
        if isinstance(target, QuoteResponse):
            return self.build_swap(target)
        if not isinstance(target, QuoteRequest):
            raise TypeError(f"swap() expects a QuoteRequest or QuoteResponse, got {type(target).__name__}")
        quote = await self.quote(target)
        return self.build_swap(quote)
