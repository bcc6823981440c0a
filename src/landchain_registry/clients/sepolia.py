"""
landchain_registry.clients.sepolia

Receipt lookups on the Sepolia Ethereum testnet through web3.py.

Responsibilities:
- Validate transaction hashes recorded by admins.
- Fetch transaction receipts and reduce them to the fields the dashboard shows.
"""

from __future__ import annotations

import asyncio
import re
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import TransactionNotFound, Web3Exception

from landchain_registry.errors import NotConfiguredError, UpstreamError, ValidationFailedError
from landchain_registry.settings import Settings

TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def is_tx_hash(value: str) -> bool:
    return bool(TX_HASH_RE.match(value))


class SepoliaClient:
    def __init__(self, *, settings: Settings, w3: AsyncWeb3 | None = None) -> None:
        self._settings = settings
        self._w3 = w3

    def _web3(self) -> AsyncWeb3:
        if self._w3 is None:
            if not self._settings.sepolia_rpc_url:
                raise NotConfiguredError("Sepolia RPC URL is not configured")
            self._w3 = AsyncWeb3(AsyncHTTPProvider(self._settings.sepolia_rpc_url))
        return self._w3

    async def transaction_receipt(self, tx_hash: str) -> dict[str, Any]:
        if not is_tx_hash(tx_hash):
            raise ValidationFailedError(f"invalid transaction hash: {tx_hash}")

        w3 = self._web3()
        try:
            receipt = await w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            # Unknown or not yet mined.
            return {"txHash": tx_hash, "found": False, "confirmed": False}
        except (Web3Exception, ValueError, OSError, asyncio.TimeoutError) as e:
            raise UpstreamError(f"Sepolia RPC call failed: {e}") from e

        return {
            "txHash": tx_hash,
            "found": True,
            "confirmed": receipt.get("status") == 1,
            "blockNumber": receipt.get("blockNumber"),
            "from": receipt.get("from"),
            "to": receipt.get("to"),
            "gasUsed": receipt.get("gasUsed"),
        }
