"""
landchain_registry.api.routers.properties

Property registration, verification, marketplace and transfer endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from landchain_registry.api.deps import property_service
from landchain_registry.auth.deps import acting_user_id, optional_principal
from landchain_registry.auth.models import Principal
from landchain_registry.db.models import PropertyStatus
from landchain_registry.schemas import (
    CamelModel,
    PropertyRecord,
    TransactionRecord,
    envelope,
    to_wire,
    to_wire_list,
)
from landchain_registry.services.properties import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


class PropertyRegisterRequest(CamelModel):
    property_id: str | None = Field(default=None, max_length=128)
    owner: str = Field(min_length=1)
    owner_name: str = ""
    location: str = Field(min_length=1)
    area: float = Field(gt=0)
    price: float = Field(gt=0)
    property_type: str = Field(min_length=1, max_length=64)
    description: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


class VerifyPropertyRequest(CamelModel):
    verifier_id: str | None = None
    admin_id: str | None = None


class ListPropertyRequest(CamelModel):
    price: float | None = Field(default=None, gt=0)


class PriceRequest(CamelModel):
    price: float = Field(gt=0)


class StatusRequest(CamelModel):
    status: PropertyStatus


class TransferRequest(CamelModel):
    new_owner: str = Field(min_length=1)
    new_owner_name: str = ""
    transaction_id: str | None = None


@router.post("/register")
async def register_property(
    body: PropertyRegisterRequest, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    prop = await svc.register(**body.model_dump())
    return envelope(to_wire(PropertyRecord, prop), propertyId=prop.property_id)


@router.get("")
async def list_properties(
    owner: str | None = None,
    status: PropertyStatus | None = None,
    property_type: str | None = Query(default=None, alias="propertyType"),
    listed: bool | None = None,
    svc: PropertyService = Depends(property_service),
) -> dict[str, Any]:
    props = await svc.list(owner=owner, status=status, property_type=property_type, listed=listed)
    return envelope(to_wire_list(PropertyRecord, props))


@router.get("/{property_id}")
async def get_property(
    property_id: str, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    return envelope(to_wire(PropertyRecord, await svc.view(property_id)))


@router.get("/{property_id}/history")
async def property_history(
    property_id: str, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    return envelope(to_wire_list(TransactionRecord, await svc.history(property_id)))


@router.put("/{property_id}/verify")
async def verify_property(
    property_id: str,
    body: VerifyPropertyRequest | None = None,
    principal: Principal | None = Depends(optional_principal),
    svc: PropertyService = Depends(property_service),
) -> dict[str, Any]:
    explicit = (body.verifier_id or body.admin_id) if body else None
    verifier_id = acting_user_id(explicit, principal, field="verifierId")
    return envelope(to_wire(PropertyRecord, await svc.verify(property_id, verifier_id=verifier_id)))


@router.put("/{property_id}/list")
async def list_for_sale(
    property_id: str,
    body: ListPropertyRequest | None = None,
    svc: PropertyService = Depends(property_service),
) -> dict[str, Any]:
    prop = await svc.set_listed(property_id, listed=True, price=body.price if body else None)
    return envelope(to_wire(PropertyRecord, prop))


@router.put("/{property_id}/unlist")
async def unlist(
    property_id: str, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    return envelope(to_wire(PropertyRecord, await svc.set_listed(property_id, listed=False)))


@router.put("/{property_id}/price")
async def update_price(
    property_id: str, body: PriceRequest, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    return envelope(to_wire(PropertyRecord, await svc.update_price(property_id, price=body.price)))


@router.put("/{property_id}/status")
async def update_status(
    property_id: str, body: StatusRequest, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    prop = await svc.update_status(property_id, status=body.status)
    return envelope(to_wire(PropertyRecord, prop))


@router.put("/{property_id}/transfer")
async def transfer_property(
    property_id: str, body: TransferRequest, svc: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    prop = await svc.transfer(
        property_id,
        new_owner=body.new_owner,
        new_owner_name=body.new_owner_name,
        transaction_id=body.transaction_id,
    )
    return envelope(to_wire(PropertyRecord, prop))
