"""
landchain_registry.schemas

Wire-format records (camelCase JSON) shared by the API and the sync service.

Responsibilities:
- Serialize ORM rows into the JSON shape the frontend already consumes.
- Parse full records back for `/api/sync` imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from landchain_registry.db.models import EscrowStatus, OfferStatus, PropertyStatus, UserRole


def _blank_to_none(value: Any) -> Any:
    # The frontend stores not-yet-set timestamps as "".
    return None if value == "" else value


OptionalTimestamp = Annotated[datetime | None, BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DocumentRecord(CamelModel):
    document_id: str
    document_type: str
    document_hash: str
    uploaded_at: datetime
    verified_by: str = ""
    is_verified: bool = False


class UserOut(CamelModel):
    user_id: str
    name: str
    email: str
    phone: str = ""
    aadhar: str = ""
    pan: str = ""
    address: str = ""
    role: UserRole
    wallet_address: str = ""
    is_verified: bool = False
    documents: list[DocumentRecord] = Field(default_factory=list)
    registered_at: datetime
    last_login: OptionalTimestamp = None


class UserRecord(UserOut):
    # Full record including the stored credential; only used for sync export/import.
    password_hash: str = ""


class PropertyRecord(CamelModel):
    property_id: str
    owner: str
    owner_name: str = ""
    location: str
    area: float = 0.0
    price: float = 0.0
    property_type: str
    description: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    documents: list[str] = Field(default_factory=list)
    status: PropertyStatus
    listed_for_sale: bool = False
    verified_by: str = ""
    verified_at: OptionalTimestamp = None
    views: int = 0
    registered_at: datetime
    last_updated: datetime


class OfferRecord(CamelModel):
    offer_id: str
    property_id: str
    buyer_id: str
    buyer_name: str = ""
    seller_id: str
    seller_name: str = ""
    offer_amount: float
    message: str = ""
    status: OfferStatus
    admin_verified: bool = False
    admin_id: str = ""
    verified_at: OptionalTimestamp = None
    sepolia_tx_hash: str = ""
    created_at: datetime
    updated_at: datetime


class TransactionRecord(CamelModel):
    transaction_id: str
    property_id: str = ""
    from_owner: str = ""
    to_owner: str = ""
    amount: float = 0.0
    status: str = "COMPLETED"
    offer_id: str = ""
    timestamp: datetime
    type: str


class EscrowRecord(CamelModel):
    escrow_id: str
    property_id: str
    buyer: str
    seller: str
    amount: float
    status: EscrowStatus
    transaction_hash: str = ""
    created_at: datetime
    updated_at: datetime


RECORD_TYPES: dict[str, type[CamelModel]] = {
    "users": UserRecord,
    "properties": PropertyRecord,
    "offers": OfferRecord,
    "transactions": TransactionRecord,
    "escrows": EscrowRecord,
}


def envelope(data: Any, **extra: Any) -> dict[str, Any]:
    # Every successful response uses the `{"success": true, "data": ...}` shape.
    return {"success": True, "data": data, **extra}


def to_wire(record_type: type[CamelModel], obj: Any) -> dict[str, Any]:
    return record_type.model_validate(obj).model_dump(by_alias=True, mode="json")


def to_wire_list(record_type: type[CamelModel], objs: Any) -> list[dict[str, Any]]:
    return [to_wire(record_type, o) for o in objs]
