"""
landchain_registry.db.models

Core persistence schema for the land registry.

Responsibilities:
- Define ORM models for the registry's flat records:
  - User: KYC identity, role and uploaded documents
  - Property: land parcel, verification and listing state
  - Offer: buyer/seller negotiation and admin verification
  - Transaction: append-only audit rows derived from other writes
  - Escrow: escrow accounts tied to a property sale
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Enum, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landchain_registry.db.base import Base


def utcnow() -> datetime:
    # Naive UTC timestamps, rendered as ISO strings on the wire.
    return datetime.now(UTC).replace(tzinfo=None)


class UserRole(enum.StrEnum):
    buyer = "BUYER"
    seller = "SELLER"
    admin = "ADMIN"


class PropertyStatus(enum.StrEnum):
    pending = "PENDING"
    verified = "VERIFIED"
    transferred = "TRANSFERRED"


class OfferStatus(enum.StrEnum):
    pending = "PENDING"
    accepted = "ACCEPTED"
    rejected = "REJECTED"
    admin_verified = "ADMIN_VERIFIED"
    completed = "COMPLETED"
    cancelled = "CANCELLED"


class EscrowStatus(enum.StrEnum):
    created = "CREATED"
    funded = "FUNDED"
    released = "RELEASED"
    cancelled = "CANCELLED"


class TransactionType(enum.StrEnum):
    # Stored as plain strings; clients render these labels directly.
    property_registered = "PROPERTY_REGISTERED"
    property_transferred = "PROPERTY_TRANSFERRED"
    offer_created = "OFFER_CREATED"
    offer_accepted = "OFFER_ACCEPTED"
    offer_rejected = "OFFER_REJECTED"
    offer_verified = "OFFER_VERIFIED"
    offer_cancelled = "OFFER_CANCELLED"


class User(Base):
    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    aadhar: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    pan: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False, index=True)
    wallet_address: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    # base64 of the password, kept for compatibility with the existing frontend.
    password_hash: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    documents: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    registered_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    last_login: Mapped[datetime | None] = mapped_column(nullable=True)


class Property(Base):
    __tablename__ = "properties"

    property_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    owner_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    location: Mapped[str] = mapped_column(Text, nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    property_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    latitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    longitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    documents: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[PropertyStatus] = mapped_column(
        Enum(PropertyStatus), nullable=False, index=True
    )
    listed_for_sale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verified_by: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    verified_at: Mapped[datetime | None] = mapped_column(nullable=True)
    views: Mapped[int] = mapped_column(nullable=False, default=0)

    registered_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    last_updated: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


class Offer(Base):
    __tablename__ = "offers"

    offer_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    buyer_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    buyer_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    seller_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    seller_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    offer_amount: Mapped[float] = mapped_column(Float, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[OfferStatus] = mapped_column(Enum(OfferStatus), nullable=False, index=True)
    admin_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin_id: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    verified_at: Mapped[datetime | None] = mapped_column(nullable=True)
    sepolia_tx_hash: Mapped[str] = mapped_column(String(128), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


class Transaction(Base):
    __tablename__ = "transactions"

    transaction_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(128), nullable=False, default="", index=True)
    from_owner: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    to_owner: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="COMPLETED")
    offer_id: Mapped[str] = mapped_column(String(128), nullable=False, default="", index=True)
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    timestamp: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, index=True)

    __table_args__ = (
        Index("ix_transactions_from_owner", "from_owner"),
        Index("ix_transactions_to_owner", "to_owner"),
    )


class Escrow(Base):
    __tablename__ = "escrows"

    escrow_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    buyer: Mapped[str] = mapped_column(String(128), nullable=False)
    seller: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[EscrowStatus] = mapped_column(Enum(EscrowStatus), nullable=False, index=True)
    transaction_hash: Mapped[str] = mapped_column(String(128), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


# --- Module Notes -----------------------------------------------------------
# Records reference each other by id only; there are no foreign keys because the
# frontend may sync collections independently (see `/api/sync`).
