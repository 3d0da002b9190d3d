"""Pytest configuration and fixtures."""

import os

import msgpack
import pytest
from solders.pubkey import Pubkey

# Keep a developer's .env / shell settings out of the tests
os.environ["TITAN_AUTH_TOKEN"] = "test-token"
os.environ["TITAN_BASE_URL"] = ""

from titan_swap.config import get_settings
from titan_swap.contracts.quote import QuoteRequest

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USER_PUBKEY = Pubkey.from_bytes(bytes([7]) * 32)
LOOKUP_TABLE = Pubkey.from_bytes(bytes([42]) * 32)
PROGRAM_ID = Pubkey.from_bytes(bytes([99]) * 32)


def address(seed: int) -> bytes:
    """Deterministic 32-byte address for payloads."""
    return bytes([seed]) * 32


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are lru_cached; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sol_mint() -> Pubkey:
    return Pubkey.from_string(SOL_MINT)


@pytest.fixture
def usdc_mint() -> Pubkey:
    return Pubkey.from_string(USDC_MINT)


@pytest.fixture
def user_pubkey() -> Pubkey:
    return USER_PUBKEY


@pytest.fixture
def lookup_table() -> Pubkey:
    return LOOKUP_TABLE


@pytest.fixture
def program_id() -> Pubkey:
    return PROGRAM_ID


@pytest.fixture
def quote_request(sol_mint, usdc_mint) -> QuoteRequest:
    """SOL -> USDC, 0.1 SOL at 50 bps."""
    return QuoteRequest(
        input_mint=sol_mint,
        output_mint=usdc_mint,
        amount=100_000_000,
        user_pubkey=USER_PUBKEY,
        slippage_bps=50,
    )


@pytest.fixture
def make_step(sol_mint, usdc_mint):
    """Factory for a route step in map form."""

    def _make(**overrides) -> dict:
        step = {
            "ammKey": address(11),
            "label": "Whirlpool",
            "inputMint": bytes(sol_mint),
            "outputMint": bytes(usdc_mint),
            "inAmount": 100_000_000,
            "outAmount": 15_000_000,
            "allocPpb": 1_000_000_000,
        }
        step.update(overrides)
        return step

    return _make


@pytest.fixture
def make_instruction():
    """Factory for a compact instruction record in map form."""

    def _make(**overrides) -> dict:
        instruction = {
            "p": bytes(PROGRAM_ID),
            "a": [
                {"p": bytes(USER_PUBKEY), "s": True, "w": True},
                {"p": address(12), "s": False, "w": True},
                {"p": address(13), "s": False, "w": False},
            ],
            "d": b"\xe5\x17\xcb\x97\x7a\xe3\xad\x2a",
        }
        instruction.update(overrides)
        return instruction

    return _make


@pytest.fixture
def make_route(make_step, make_instruction):
    """Factory for a route in map form: one step, one instruction, one lookup table."""

    def _make(**overrides) -> dict:
        route = {
            "inAmount": 100_000_000,
            "outAmount": 15_000_000,
            "slippageBps": 50,
            "steps": [make_step()],
            "instructions": [make_instruction()],
            "addressLookupTables": [bytes(LOOKUP_TABLE)],
        }
        route.update(overrides)
        return route

    return _make


@pytest.fixture
def make_payload(sol_mint, usdc_mint):
    """Factory for a packed quote response."""

    def _make(quotes: dict, **overrides) -> bytes:
        payload = {
            "id": "quote-1",
            "inputMint": bytes(sol_mint),
            "outputMint": bytes(usdc_mint),
            "swapMode": "ExactIn",
            "amount": 100_000_000,
            "quotes": quotes,
        }
        payload.update(overrides)
        return msgpack.packb(payload, use_bin_type=True)

    return _make
