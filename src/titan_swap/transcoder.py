"""Transcoding of decoded routes into quote and swap responses."""

import logging
from typing import Callable, Mapping, Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from titan_swap.contracts.quote import (
    PlatformFee,
    QuoteRequest,
    QuoteResponse,
    RoutePlanStep,
    SwapInfo,
    SwapMode,
)
from titan_swap.contracts.swap import SwapResponse
from titan_swap.errors import NoRoutesAvailableError
from titan_swap.wire.schema import (
    InstructionData,
    RoutePlanStepData,
    SwapQuotes,
    SwapRoute,
)

logger = logging.getLogger(__name__)

U32_MAX = (1 << 32) - 1

# Picks one (route_id, route) pair from the decoded routes, or None if empty
RouteSelector = Callable[[Mapping[str, SwapRoute]], Optional[tuple[str, SwapRoute]]]


def select_first_route(routes: Mapping[str, SwapRoute]) -> Optional[tuple[str, SwapRoute]]:
    """Select the first route in wire order.

    This is not a ranking: the service does not promise the first route is
    the best one.
    """
    for route_id, route in routes.items():
        return route_id, route
    return None


def select_best_out_amount(routes: Mapping[str, SwapRoute]) -> Optional[tuple[str, SwapRoute]]:
    """Select the route with the highest out_amount (first wins on ties)."""
    best = None
    for route_id, route in routes.items():
        if best is None or route.out_amount > best[1].out_amount:
            best = (route_id, route)
    return best


def pubkey_from_bytes(raw: bytes) -> Pubkey:
    return Pubkey.from_bytes(raw)


def transcode_step(step: RoutePlanStepData, default_context_slot: int) -> RoutePlanStep:
    """Convert a decoded hop into a route plan entry.

    percent stays at 100 whatever alloc_ppb says; alloc_ppb is carried over
    unchanged in swap_info.
    """
    return RoutePlanStep(
        swap_info=SwapInfo(
            amm_key=pubkey_from_bytes(step.amm_key),
            label=step.label,
            input_mint=pubkey_from_bytes(step.input_mint),
            output_mint=pubkey_from_bytes(step.output_mint),
            in_amount=step.in_amount,
            out_amount=step.out_amount,
            alloc_ppb=step.alloc_ppb,
            fee_mint=pubkey_from_bytes(step.fee_mint) if step.fee_mint is not None else Pubkey.default(),
            fee_amount=step.fee_amount if step.fee_amount is not None else 0,
            context_slot=step.context_slot if step.context_slot is not None else default_context_slot,
        ),
        percent=100,
    )


def transcode_quote(
    quotes: SwapQuotes,
    request: QuoteRequest,
    selector: RouteSelector = select_first_route,
) -> QuoteResponse:
    """Build a QuoteResponse from the decoded response.

    Args:
        quotes: Decoded service response
        request: The request that produced it
        selector: Route selection strategy

    Returns:
        QuoteResponse holding the selected raw route

    Raises:
        NoRoutesAvailableError: If the selector finds no route
    """
    selected = selector(quotes.quotes)
    if selected is None:
        logger.warning(f"Quote {quotes.id} returned no routes")
        raise NoRoutesAvailableError()

    route_id, route = selected
    default_context_slot = route.context_slot if route.context_slot is not None else 0
    route_plan = tuple(transcode_step(step, default_context_slot) for step in route.steps)

    platform_fee = None
    if route.platform_fee is not None:
        platform_fee = PlatformFee(
            amount=route.platform_fee.amount,
            fee_bps=route.platform_fee.fee_bps,
        )

    time_taken = None
    if route.time_taken_ns is not None:
        time_taken = route.time_taken_ns / 1e9

    return QuoteResponse(
        input_mint=request.input_mint,
        in_amount=request.amount,
        output_mint=request.output_mint,
        out_amount=route.out_amount,
        swap_mode=request.swap_mode or SwapMode.default(),
        slippage_bps=route.slippage_bps,
        platform_fee=platform_fee,
        route_plan=route_plan,
        raw_route=route,
        context_slot=route.context_slot,
        time_taken=time_taken,
        quote_id=quotes.id,
        route_id=route_id,
    )


def transcode_instruction(instruction: InstructionData) -> Instruction:
    """Expand a compact instruction record; data bytes are copied verbatim."""
    accounts = [
        AccountMeta(
            pubkey=pubkey_from_bytes(meta.pubkey),
            is_signer=meta.is_signer,
            is_writable=meta.is_writable,
        )
        for meta in instruction.accounts
    ]
    return Instruction(
        program_id=pubkey_from_bytes(instruction.program_id),
        data=instruction.data,
        accounts=accounts,
    )


def compute_unit_limit(compute_units: Optional[int]) -> int:
    """Narrow the route's compute unit estimate to the u32 limit field.

    Absent estimates become 0. Estimates above u32 are clamped, not wrapped.
    """
    if compute_units is None:
        return 0
    if compute_units > U32_MAX:
        logger.warning(f"Compute unit estimate {compute_units} exceeds u32, clamping to {U32_MAX}")
        return U32_MAX
    return compute_units


def transcode_swap(quote: QuoteResponse) -> SwapResponse:
    """Build a SwapResponse from the raw route retained in a quote.

    Raises:
        NoRoutesAvailableError: If the route carries no instructions
    """
    route = quote.raw_route

    if not route.instructions:
        logger.warning(f"Route {quote.route_id} has no instructions")
        raise NoRoutesAvailableError()

    instructions = tuple(transcode_instruction(ix) for ix in route.instructions)
    lookup_tables = tuple(pubkey_from_bytes(raw) for raw in route.address_lookup_tables)

    return SwapResponse(
        instructions=instructions,
        address_lookup_table_addresses=lookup_tables,
        compute_unit_limit=compute_unit_limit(route.compute_units),
        compute_units_safe=route.compute_units_safe,
        context_slot=route.context_slot,
        expires_at_ms=route.expires_at_ms,
        expires_after_slot=route.expires_after_slot,
        transaction=route.transaction,
    )
