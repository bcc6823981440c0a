"""
landchain_registry.ledger.factory

Ledger selection at startup.

Responsibilities:
- Build the ledger requested by `Settings.ledger_mode`.
- In `auto` mode, fall back to the mock ledger whenever the Fabric
  prerequisites (connection profile, wallet identity, reachable gateway) are missing.
"""

from __future__ import annotations

from pathlib import Path

import httpx

from landchain_registry.errors import LedgerError
from landchain_registry.ledger.base import Ledger
from landchain_registry.ledger.fabric import FabricLedger
from landchain_registry.ledger.mock import MockLedger
from landchain_registry.ledger.wallet import FileSystemWallet
from landchain_registry.observability.logging import get_logger
from landchain_registry.settings import Settings

log = get_logger(__name__)


async def connect_fabric(
    settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
) -> FabricLedger:
    if not Path(settings.fabric_connection_profile).is_file():
        raise LedgerError(f"connection profile not found: {settings.fabric_connection_profile}")

    identity = FileSystemWallet(settings.fabric_wallet_path).get(settings.fabric_identity)
    if identity is None:
        raise LedgerError(
            f"identity '{settings.fabric_identity}' not found in wallet; "
            "run `python -m landchain_registry.ledger.enroll`"
        )

    http = httpx.AsyncClient(
        base_url=settings.fabric_gateway_url,
        timeout=settings.fabric_timeout_seconds,
        transport=transport,
    )
    ledger = FabricLedger(
        http=http,
        channel=settings.fabric_channel,
        identity_label=settings.fabric_identity,
        identity=identity,
    )
    try:
        await ledger.ping()
    except LedgerError:
        await ledger.close()
        raise
    return ledger


async def connect_ledger(
    settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
) -> Ledger:
    if settings.ledger_mode == "mock":
        log.info("ledger_connected", mode="MOCK")
        return MockLedger(history=settings.mock_ledger_history)

    try:
        ledger = await connect_fabric(settings, transport=transport)
    except LedgerError as e:
        if settings.ledger_mode == "fabric":
            raise
        log.warning("ledger_fallback_mock", reason=e.message)
        return MockLedger(history=settings.mock_ledger_history)

    log.info("ledger_connected", mode="FABRIC", channel=settings.fabric_channel)
    return ledger
