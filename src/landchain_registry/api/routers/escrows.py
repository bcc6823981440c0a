"""
landchain_registry.api.routers.escrows

Escrow endpoints: create, fund, release and cancel.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from landchain_registry.api.deps import escrow_service
from landchain_registry.schemas import CamelModel, EscrowRecord, envelope, to_wire, to_wire_list
from landchain_registry.services.escrows import EscrowService

router = APIRouter(prefix="/api/escrows", tags=["escrows"])


class EscrowCreateRequest(CamelModel):
    escrow_id: str | None = Field(default=None, max_length=128)
    property_id: str = Field(min_length=1)
    buyer: str = Field(min_length=1)
    seller: str = Field(min_length=1)
    amount: float = Field(gt=0)


class TxHashRequest(CamelModel):
    tx_hash: str = Field(min_length=1)


class CancelEscrowRequest(CamelModel):
    tx_hash: str = ""


@router.post("")
async def create_escrow(
    body: EscrowCreateRequest, svc: EscrowService = Depends(escrow_service)
) -> dict[str, Any]:
    escrow = await svc.create(**body.model_dump())
    return envelope(to_wire(EscrowRecord, escrow), escrowId=escrow.escrow_id)


@router.get("")
async def list_escrows(
    property_id: str | None = Query(default=None, alias="propertyId"),
    svc: EscrowService = Depends(escrow_service),
) -> dict[str, Any]:
    return envelope(to_wire_list(EscrowRecord, await svc.list(property_id=property_id)))


@router.get("/{escrow_id}")
async def get_escrow(
    escrow_id: str, svc: EscrowService = Depends(escrow_service)
) -> dict[str, Any]:
    return envelope(to_wire(EscrowRecord, await svc.get(escrow_id)))


@router.put("/{escrow_id}/fund")
async def fund_escrow(
    escrow_id: str, body: TxHashRequest, svc: EscrowService = Depends(escrow_service)
) -> dict[str, Any]:
    return envelope(to_wire(EscrowRecord, await svc.fund(escrow_id, tx_hash=body.tx_hash)))


@router.put("/{escrow_id}/release")
async def release_escrow(
    escrow_id: str, body: TxHashRequest, svc: EscrowService = Depends(escrow_service)
) -> dict[str, Any]:
    return envelope(to_wire(EscrowRecord, await svc.release(escrow_id, tx_hash=body.tx_hash)))


@router.put("/{escrow_id}/cancel")
async def cancel_escrow(
    escrow_id: str,
    body: CancelEscrowRequest | None = None,
    svc: EscrowService = Depends(escrow_service),
) -> dict[str, Any]:
    escrow = await svc.cancel(escrow_id, tx_hash=body.tx_hash if body else "")
    return envelope(to_wire(EscrowRecord, escrow))
