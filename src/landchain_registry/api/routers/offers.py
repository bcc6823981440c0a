"""
landchain_registry.api.routers.offers

Offer negotiation endpoints.

Responsibilities:
- Create offers and expose the buyer/seller/admin transitions.
- List the offers waiting for admin verification (the admin dashboard queue).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from landchain_registry.api.deps import offer_service
from landchain_registry.auth.deps import acting_user_id, optional_principal
from landchain_registry.auth.models import Principal
from landchain_registry.clients.sepolia import is_tx_hash
from landchain_registry.db.models import OfferStatus
from landchain_registry.errors import ValidationFailedError
from landchain_registry.schemas import (
    CamelModel,
    OfferRecord,
    TransactionRecord,
    envelope,
    to_wire,
    to_wire_list,
)
from landchain_registry.services.offers import OfferService

router = APIRouter(prefix="/api/offers", tags=["offers"])


class OfferCreateRequest(CamelModel):
    offer_id: str | None = Field(default=None, max_length=128)
    property_id: str = Field(min_length=1)
    buyer_id: str = Field(min_length=1)
    buyer_name: str = ""
    seller_id: str | None = None
    seller_name: str | None = None
    offer_amount: float = Field(gt=0)
    message: str = ""


class AdminVerifyRequest(CamelModel):
    admin_id: str | None = None
    sepolia_tx_hash: str = ""


class CompleteRequest(CamelModel):
    transfer: bool = True
    transaction_id: str | None = None


@router.post("/create")
async def create_offer(
    body: OfferCreateRequest, svc: OfferService = Depends(offer_service)
) -> dict[str, Any]:
    offer = await svc.create(**body.model_dump())
    return envelope(to_wire(OfferRecord, offer), offerId=offer.offer_id)


@router.get("")
async def list_offers(
    property_id: str | None = Query(default=None, alias="propertyId"),
    buyer_id: str | None = Query(default=None, alias="buyerId"),
    seller_id: str | None = Query(default=None, alias="sellerId"),
    status: OfferStatus | None = None,
    svc: OfferService = Depends(offer_service),
) -> dict[str, Any]:
    offers = await svc.list(
        property_id=property_id, buyer_id=buyer_id, seller_id=seller_id, status=status
    )
    return envelope(to_wire_list(OfferRecord, offers))


@router.get("/pending-verification")
async def pending_verification(svc: OfferService = Depends(offer_service)) -> dict[str, Any]:
    return envelope(to_wire_list(OfferRecord, await svc.pending_admin_verifications()))


@router.get("/{offer_id}")
async def get_offer(offer_id: str, svc: OfferService = Depends(offer_service)) -> dict[str, Any]:
    return envelope(to_wire(OfferRecord, await svc.get(offer_id)))


@router.get("/{offer_id}/history")
async def offer_history(
    offer_id: str, svc: OfferService = Depends(offer_service)
) -> dict[str, Any]:
    return envelope(to_wire_list(TransactionRecord, await svc.history(offer_id)))


@router.put("/{offer_id}/accept")
async def accept_offer(offer_id: str, svc: OfferService = Depends(offer_service)) -> dict[str, Any]:
    return envelope(to_wire(OfferRecord, await svc.accept(offer_id)))


@router.put("/{offer_id}/reject")
async def reject_offer(offer_id: str, svc: OfferService = Depends(offer_service)) -> dict[str, Any]:
    return envelope(to_wire(OfferRecord, await svc.reject(offer_id)))


@router.put("/{offer_id}/verify")
async def admin_verify_offer(
    offer_id: str,
    body: AdminVerifyRequest | None = None,
    principal: Principal | None = Depends(optional_principal),
    svc: OfferService = Depends(offer_service),
) -> dict[str, Any]:
    body = body or AdminVerifyRequest()
    if body.sepolia_tx_hash and not is_tx_hash(body.sepolia_tx_hash):
        raise ValidationFailedError(f"invalid transaction hash: {body.sepolia_tx_hash}")
    offer = await svc.admin_verify(
        offer_id,
        admin_id=acting_user_id(body.admin_id, principal),
        sepolia_tx_hash=body.sepolia_tx_hash,
    )
    return envelope(to_wire(OfferRecord, offer))


@router.put("/{offer_id}/complete")
async def complete_offer(
    offer_id: str,
    body: CompleteRequest | None = None,
    svc: OfferService = Depends(offer_service),
) -> dict[str, Any]:
    body = body or CompleteRequest()
    offer = await svc.complete(
        offer_id, transfer=body.transfer, transaction_id=body.transaction_id
    )
    return envelope(to_wire(OfferRecord, offer))


@router.put("/{offer_id}/cancel")
async def cancel_offer(offer_id: str, svc: OfferService = Depends(offer_service)) -> dict[str, Any]:
    return envelope(to_wire(OfferRecord, await svc.cancel(offer_id)))
