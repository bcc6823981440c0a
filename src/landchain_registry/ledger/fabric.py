"""
landchain_registry.ledger.fabric

HTTP client for a Fabric REST gateway sitting in front of the peers.

Responsibilities:
- Submit and evaluate chaincode functions on the configured channel.
- Present the wallet identity on every call so the gateway signs as that user.
- Translate transport and gateway failures into `LedgerError`.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from landchain_registry.errors import LedgerError
from landchain_registry.ledger.base import LedgerMode, chaincode_args
from landchain_registry.ledger.wallet import X509Identity
from landchain_registry.observability.logging import get_logger

log = get_logger(__name__)


class FabricLedger:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        channel: str,
        identity_label: str,
        identity: X509Identity,
    ) -> None:
        self._http = http
        self._channel = channel
        self._label = identity_label
        self._identity = identity

    @property
    def mode(self) -> LedgerMode:
        return "FABRIC"

    async def ping(self) -> None:
        try:
            r = await self._http.get("/health")
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise LedgerError(f"Fabric gateway unreachable: {e}") from e

    async def submit(self, contract: str, fn: str, *args: Any) -> dict[str, Any]:
        log.info("fabric_submit", contract=contract, fn=fn)
        data = await self._call("submit", contract, fn, args)
        return data if isinstance(data, dict) else {"payload": data}

    async def evaluate(self, contract: str, fn: str, *args: Any) -> Any:
        log.info("fabric_evaluate", contract=contract, fn=fn)
        return await self._call("evaluate", contract, fn, args)

    async def _call(self, action: str, contract: str, fn: str, args: tuple[Any, ...]) -> Any:
        url = f"/channels/{self._channel}/chaincodes/{contract}/{action}"
        body = {
            "fn": fn,
            "args": chaincode_args(*args),
            "identity": self._label,
            "mspId": self._identity.msp_id,
        }
        try:
            r = await self._http.post(url, json=body)
        except httpx.HTTPError as e:
            raise LedgerError(f"Fabric {action} {contract}.{fn} failed: {e}") from e

        if r.status_code >= 400:
            log.error("fabric_call_failed", contract=contract, fn=fn, status=r.status_code)
            raise LedgerError(_error_message(r) or f"Fabric {action} {contract}.{fn} failed")

        # Chaincode functions that return nothing come back as an empty body.
        if not r.content:
            return {}
        try:
            return r.json()
        except json.JSONDecodeError:
            return {"payload": r.text}

    async def close(self) -> None:
        await self._http.aclose()


def _error_message(r: httpx.Response) -> str:
    try:
        body = r.json()
    except json.JSONDecodeError:
        return r.text
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or "")
    return ""
