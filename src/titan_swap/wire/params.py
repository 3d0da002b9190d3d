"""Query parameter encoding for the quote endpoint."""

from titan_swap.contracts.quote import QuoteRequest


def build_query_params(request: QuoteRequest) -> list[tuple[str, str]]:
    """Build the ordered query parameters for a quote request.

    The four required parameters always come first; optional ones follow in a
    fixed order and only when set. Values are not validated here.
    """
    params = [
        ("inputMint", str(request.input_mint)),
        ("outputMint", str(request.output_mint)),
        ("amount", str(request.amount)),
        ("userPublicKey", str(request.user_pubkey)),
    ]

    if request.max_accounts is not None:
        params.append(("accountsLimitTotal", str(request.max_accounts)))
    if request.swap_mode is not None:
        params.append(("swapMode", request.swap_mode.value))
    if request.slippage_bps > 0:
        params.append(("slippageBps", str(request.slippage_bps)))
    if request.only_direct_routes is not None:
        params.append(("onlyDirectRoutes", "true" if request.only_direct_routes else "false"))
    if request.excluded_dexes is not None:
        params.append(("excludeDexes", request.excluded_dexes))
    if request.size_constraints is not None:
        params.append(("sizeConstraint", str(request.size_constraints)))
    if request.accounts_limit_writable is not None:
        params.append(("accountsLimitWritable", str(request.accounts_limit_writable)))
    if request.providers is not None:
        params.append(("providers", request.providers))

    return params
