"""
landchain_registry.services.properties

Property lifecycle service.

Responsibilities:
- Register properties and run the verification / listing / transfer transitions.
- Mirror each change to the property chaincode and append its audit row.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import (
    Property,
    PropertyStatus,
    Transaction,
    TransactionType,
    utcnow,
)
from landchain_registry.db.repositories.properties import PropertyRepo
from landchain_registry.errors import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationFailedError,
)
from landchain_registry.ledger.base import PROPERTY_CONTRACT, Ledger
from landchain_registry.observability.logging import get_logger
from landchain_registry.services.ids import new_id, new_transaction_id
from landchain_registry.services.transactions import TransactionService

log = get_logger(__name__)

# A property whose title has been checked (verified, or already transferred once).
TITLED_STATUSES = frozenset({PropertyStatus.verified, PropertyStatus.transferred})


class PropertyService:
    def __init__(self, *, session: AsyncSession, ledger: Ledger) -> None:
        self._session = session
        self._ledger = ledger
        self._properties = PropertyRepo(session)
        self._transactions = TransactionService(session=session)

    async def _load(self, property_id: str, *, for_update: bool = True) -> Property:
        prop = await self._properties.get(property_id, for_update=for_update)
        if prop is None:
            raise NotFoundError("Property", property_id)
        return prop

    async def register(
        self,
        *,
        owner: str,
        location: str,
        area: float,
        price: float,
        property_type: str,
        property_id: str | None = None,
        owner_name: str = "",
        description: str = "",
        latitude: float = 0.0,
        longitude: float = 0.0,
    ) -> Property:
        property_id = property_id or new_id("PROP")
        if await self._properties.get(property_id) is not None:
            raise ConflictError(f"property {property_id} already exists")

        await self._ledger.submit(
            PROPERTY_CONTRACT,
            "RegisterProperty",
            property_id,
            owner,
            owner_name,
            location,
            area,
            price,
            property_type,
            description,
            latitude,
            longitude,
        )
        now = utcnow()
        prop = await self._properties.create(
            property_id=property_id,
            owner=owner,
            owner_name=owner_name,
            location=location,
            area=area,
            price=price,
            property_type=property_type,
            description=description,
            latitude=latitude,
            longitude=longitude,
            registered_at=now,
            last_updated=now,
        )
        await self._transactions.record(
            TransactionType.property_registered,
            property_id=property_id,
            to_owner=owner,
            amount=price,
            status="COMPLETED",
        )
        await self._session.commit()
        log.info("property_registered", property_id=property_id, owner=owner)
        return prop

    async def get(self, property_id: str) -> Property:
        return await self._load(property_id, for_update=False)

    async def view(self, property_id: str) -> Property:
        prop = await self._load(property_id)
        await self._ledger.submit(PROPERTY_CONTRACT, "IncrementPropertyViews", property_id)
        prop.views += 1
        await self._session.commit()
        return prop

    async def list(
        self,
        *,
        owner: str | None = None,
        status: PropertyStatus | None = None,
        property_type: str | None = None,
        listed: bool | None = None,
    ) -> list[Property]:
        return await self._properties.list(
            owner=owner, status=status, property_type=property_type, listed=listed
        )

    async def verify(self, property_id: str, *, verifier_id: str) -> Property:
        prop = await self._load(property_id)
        if prop.status != PropertyStatus.pending:
            raise InvalidTransitionError("Property", property_id, prop.status.value, "verify")

        await self._ledger.submit(PROPERTY_CONTRACT, "VerifyProperty", property_id, verifier_id)
        now = utcnow()
        prop.status = PropertyStatus.verified
        prop.verified_by = verifier_id
        prop.verified_at = now
        prop.last_updated = now
        await self._session.commit()
        log.info("property_verified", property_id=property_id, verifier_id=verifier_id)
        return prop

    async def set_listed(
        self, property_id: str, *, listed: bool, price: float | None = None
    ) -> Property:
        prop = await self._load(property_id)
        if listed and prop.status not in TITLED_STATUSES:
            raise InvalidTransitionError("Property", property_id, prop.status.value, "list")
        if price is not None and price != prop.price:
            await self._ledger.submit(PROPERTY_CONTRACT, "UpdatePropertyPrice", property_id, price)
            prop.price = price

        # The chaincode has no listing flag; marketplace listing is registry-local state.
        prop.listed_for_sale = listed
        prop.last_updated = utcnow()
        await self._session.commit()
        log.info("property_listing_changed", property_id=property_id, listed=listed)
        return prop

    async def update_price(self, property_id: str, *, price: float) -> Property:
        if price <= 0:
            raise ValidationFailedError("price must be positive")
        prop = await self._load(property_id)

        await self._ledger.submit(PROPERTY_CONTRACT, "UpdatePropertyPrice", property_id, price)
        prop.price = price
        prop.last_updated = utcnow()
        await self._session.commit()
        log.info("property_price_updated", property_id=property_id, price=price)
        return prop

    async def update_status(self, property_id: str, *, status: PropertyStatus) -> Property:
        prop = await self._load(property_id)

        await self._ledger.submit(
            PROPERTY_CONTRACT, "UpdatePropertyStatus", property_id, status.value
        )
        prop.status = status
        if status == PropertyStatus.pending:
            prop.listed_for_sale = False
        prop.last_updated = utcnow()
        await self._session.commit()
        log.info("property_status_updated", property_id=property_id, status=status.value)
        return prop

    async def transfer(
        self,
        property_id: str,
        *,
        new_owner: str,
        new_owner_name: str = "",
        transaction_id: str | None = None,
        amount: float | None = None,
        offer_id: str = "",
        commit: bool = True,
    ) -> Property:
        prop = await self._load(property_id)
        if prop.status not in TITLED_STATUSES:
            raise InvalidTransitionError("Property", property_id, prop.status.value, "transfer")
        if new_owner == prop.owner:
            raise ValidationFailedError(f"{new_owner} already owns property {property_id}")

        transaction_id = transaction_id or new_transaction_id()
        await self._ledger.submit(
            PROPERTY_CONTRACT,
            "TransferProperty",
            property_id,
            new_owner,
            new_owner_name,
            transaction_id,
        )
        previous_owner = prop.owner
        prop.owner = new_owner
        prop.owner_name = new_owner_name
        prop.status = PropertyStatus.transferred
        prop.listed_for_sale = False
        prop.last_updated = utcnow()
        await self._transactions.record(
            TransactionType.property_transferred,
            transaction_id=transaction_id,
            property_id=property_id,
            from_owner=previous_owner,
            to_owner=new_owner,
            amount=prop.price if amount is None else amount,
            status="COMPLETED",
            offer_id=offer_id,
        )
        if commit:
            await self._session.commit()
        log.info(
            "property_transferred",
            property_id=property_id,
            from_owner=previous_owner,
            to_owner=new_owner,
        )
        return prop

    async def history(self, property_id: str) -> list[Transaction]:
        await self._load(property_id, for_update=False)
        return await self._transactions.list(property_id=property_id)
