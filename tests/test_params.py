"""Tests for quote request contracts and query parameter encoding."""

import pytest
from pydantic import ValidationError
from solders.pubkey import Pubkey

from titan_swap.contracts.quote import QuoteRequest, SwapMode
from titan_swap.wire.params import build_query_params


class TestSwapMode:
    """Tests for SwapMode parsing."""

    @pytest.mark.parametrize("mode", [SwapMode.EXACT_IN, SwapMode.EXACT_OUT])
    def test_text_round_trip(self, mode):
        """Test mode -> token -> mode is exact."""
        assert SwapMode.parse(str(mode)) is mode

    def test_tokens(self):
        """Test the wire tokens."""
        assert str(SwapMode.EXACT_IN) == "ExactIn"
        assert str(SwapMode.EXACT_OUT) == "ExactOut"

    @pytest.mark.parametrize("token", ["exactin", "EXACTOUT", "Exact In", "", "ExactInOut"])
    def test_parse_rejects_other_strings(self, token):
        """Test anything but the exact tokens fails."""
        with pytest.raises(ValueError, match="is not a valid SwapMode"):
            SwapMode.parse(token)

    def test_default_is_exact_in(self):
        """Test default mode."""
        assert SwapMode.default() is SwapMode.EXACT_IN


class TestQuoteRequest:
    """Tests for QuoteRequest validation."""

    def test_accepts_base58_strings(self, sol_mint, usdc_mint, user_pubkey):
        """Test address fields parse base58 strings."""
        request = QuoteRequest(
            input_mint=str(sol_mint),
            output_mint=str(usdc_mint),
            amount=1,
            user_pubkey=str(user_pubkey),
        )

        assert request.input_mint == sol_mint
        assert request.output_mint == usdc_mint
        assert request.user_pubkey == user_pubkey

    def test_accepts_swap_mode_token(self, quote_request):
        """Test swap_mode accepts its wire token."""
        request = quote_request.model_copy(update={"swap_mode": SwapMode.EXACT_OUT})
        assert request.swap_mode is SwapMode.EXACT_OUT

        parsed = QuoteRequest(
            input_mint=quote_request.input_mint,
            output_mint=quote_request.output_mint,
            amount=1,
            user_pubkey=quote_request.user_pubkey,
            swap_mode="ExactOut",
        )
        assert parsed.swap_mode is SwapMode.EXACT_OUT

    def test_is_immutable(self, quote_request):
        """Test requests cannot be modified after construction."""
        with pytest.raises(ValidationError):
            quote_request.amount = 5

    def test_rejects_amount_above_u64(self, sol_mint, usdc_mint, user_pubkey):
        """Test amount is bounded to u64."""
        with pytest.raises(ValidationError):
            QuoteRequest(
                input_mint=sol_mint,
                output_mint=usdc_mint,
                amount=1 << 64,
                user_pubkey=user_pubkey,
            )

    def test_rejects_invalid_address(self, usdc_mint, user_pubkey):
        """Test a malformed base58 string is rejected."""
        with pytest.raises(ValidationError):
            QuoteRequest(
                input_mint="not-a-pubkey",
                output_mint=usdc_mint,
                amount=1,
                user_pubkey=user_pubkey,
            )


class TestBuildQueryParams:
    """Tests for query parameter encoding."""

    def test_required_params_only(self, sol_mint, usdc_mint, user_pubkey):
        """Test a bare request yields exactly the four required parameters."""
        request = QuoteRequest(
            input_mint=sol_mint,
            output_mint=usdc_mint,
            amount=100_000_000,
            user_pubkey=user_pubkey,
        )

        assert build_query_params(request) == [
            ("inputMint", str(sol_mint)),
            ("outputMint", str(usdc_mint)),
            ("amount", "100000000"),
            ("userPublicKey", str(user_pubkey)),
        ]

    def test_all_params_in_order(self, quote_request):
        """Test every optional parameter and the fixed order."""
        request = quote_request.model_copy(
            update={
                "max_accounts": 50,
                "swap_mode": SwapMode.EXACT_OUT,
                "slippage_bps": 75,
                "only_direct_routes": False,
                "excluded_dexes": "Raydium,Phoenix",
                "size_constraints": 1232,
                "accounts_limit_writable": 30,
                "providers": "titan,okx",
            }
        )

        params = build_query_params(request)

        assert [key for key, _ in params] == [
            "inputMint",
            "outputMint",
            "amount",
            "userPublicKey",
            "accountsLimitTotal",
            "swapMode",
            "slippageBps",
            "onlyDirectRoutes",
            "excludeDexes",
            "sizeConstraint",
            "accountsLimitWritable",
            "providers",
        ]
        values = dict(params)
        assert values["accountsLimitTotal"] == "50"
        assert values["swapMode"] == "ExactOut"
        assert values["slippageBps"] == "75"
        assert values["onlyDirectRoutes"] == "false"
        assert values["excludeDexes"] == "Raydium,Phoenix"
        assert values["sizeConstraint"] == "1232"
        assert values["accountsLimitWritable"] == "30"
        assert values["providers"] == "titan,okx"

    @pytest.mark.parametrize("slippage_bps", [0, 1, 50, 65535])
    def test_slippage_included_only_when_positive(self, quote_request, slippage_bps):
        """Test slippageBps is omitted at 0 and exact otherwise."""
        request = quote_request.model_copy(update={"slippage_bps": slippage_bps})

        values = dict(build_query_params(request))

        if slippage_bps == 0:
            assert "slippageBps" not in values
        else:
            assert values["slippageBps"] == str(slippage_bps)

    def test_swap_mode_exact_in_rendered(self, quote_request):
        """Test an explicit ExactIn is still sent."""
        request = quote_request.model_copy(update={"swap_mode": SwapMode.EXACT_IN})

        assert ("swapMode", "ExactIn") in build_query_params(request)

    def test_only_direct_routes_true(self, quote_request):
        """Test booleans render lowercase."""
        request = quote_request.model_copy(update={"only_direct_routes": True})

        assert ("onlyDirectRoutes", "true") in build_query_params(request)

    def test_amount_u64_max(self, quote_request):
        """Test the largest amount renders as an exact decimal."""
        request = quote_request.model_copy(update={"amount": (1 << 64) - 1})

        assert dict(build_query_params(request))["amount"] == "18446744073709551615"

    def test_address_strings_match_payload_bytes(self, quote_request):
        """Test string params and 32-byte wire addresses name the same key."""
        values = dict(build_query_params(quote_request))

        assert Pubkey.from_string(values["inputMint"]) == Pubkey.from_bytes(bytes(quote_request.input_mint))
        assert bytes(Pubkey.from_string(values["outputMint"])) == bytes(quote_request.output_mint)
