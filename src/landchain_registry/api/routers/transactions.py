"""
landchain_registry.api.routers.transactions

Read-only access to the transaction audit log.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from landchain_registry.api.deps import transaction_service
from landchain_registry.schemas import TransactionRecord, envelope, to_wire, to_wire_list
from landchain_registry.services.transactions import TransactionService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("")
async def list_transactions(
    user_id: str | None = Query(default=None, alias="userId"),
    property_id: str | None = Query(default=None, alias="propertyId"),
    offer_id: str | None = Query(default=None, alias="offerId"),
    svc: TransactionService = Depends(transaction_service),
) -> dict[str, Any]:
    rows = await svc.list(user_id=user_id, property_id=property_id, offer_id=offer_id)
    return envelope(to_wire_list(TransactionRecord, rows))


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str, svc: TransactionService = Depends(transaction_service)
) -> dict[str, Any]:
    return envelope(to_wire(TransactionRecord, await svc.get(transaction_id)))
