"""Swap response contract."""

import base64
from dataclasses import dataclass, field
from typing import Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class SwapResponse:
    """Instructions and metadata needed to build and sign the swap transaction.

    Lookup table contents are not resolved here; the caller fetches one
    account per address before compiling the message.
    """

    instructions: tuple[Instruction, ...]
    address_lookup_table_addresses: tuple[Pubkey, ...]
    compute_unit_limit: int = 0
    compute_units_safe: Optional[int] = None
    context_slot: Optional[int] = None
    expires_at_ms: Optional[int] = None
    expires_after_slot: Optional[int] = None
    transaction: Optional[bytes] = field(default=None, repr=False)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict (instruction data base64 encoded)."""
        return {
            "instructions": [
                {
                    "programId": str(ix.program_id),
                    "accounts": [
                        {
                            "pubkey": str(meta.pubkey),
                            "isSigner": meta.is_signer,
                            "isWritable": meta.is_writable,
                        }
                        for meta in ix.accounts
                    ],
                    "data": base64.b64encode(bytes(ix.data)).decode(),
                }
                for ix in self.instructions
            ],
            "addressLookupTableAddresses": [
                str(address) for address in self.address_lookup_table_addresses
            ],
            "computeUnitLimit": self.compute_unit_limit,
            "computeUnitsSafe": self.compute_units_safe,
            "contextSlot": self.context_slot,
            "expiresAtMs": self.expires_at_ms,
            "expiresAfterSlot": self.expires_after_slot,
        }
