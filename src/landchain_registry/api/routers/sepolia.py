"""
landchain_registry.api.routers.sepolia

Sepolia payment receipt lookup (used to check an admin verification hash).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from landchain_registry.api.deps import settings_dep
from landchain_registry.clients.sepolia import SepoliaClient
from landchain_registry.schemas import envelope
from landchain_registry.settings import Settings

router = APIRouter(prefix="/api/sepolia", tags=["sepolia"])


@router.get("/transactions/{tx_hash}")
async def transaction_receipt(
    tx_hash: str, settings: Settings = Depends(settings_dep)
) -> dict[str, Any]:
    client = SepoliaClient(settings=settings)
    return envelope(await client.transaction_receipt(tx_hash))
