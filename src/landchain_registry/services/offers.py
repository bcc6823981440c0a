"""
landchain_registry.services.offers

Offer negotiation service.

Responsibilities:
- Create offers and drive them through
  PENDING -> ACCEPTED -> ADMIN_VERIFIED -> COMPLETED (or REJECTED / CANCELLED).
- Reject out-of-order transitions the same way the offer chaincode does.
- Append one audit row per status change; completing an offer can transfer
  the property to the buyer in the same commit.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import (
    Offer,
    OfferStatus,
    Transaction,
    TransactionType,
    utcnow,
)
from landchain_registry.db.repositories.offers import OfferRepo
from landchain_registry.db.repositories.properties import PropertyRepo
from landchain_registry.errors import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationFailedError,
)
from landchain_registry.ledger.base import OFFER_CONTRACT, Ledger
from landchain_registry.observability.logging import get_logger
from landchain_registry.services.ids import new_id
from landchain_registry.services.properties import PropertyService
from landchain_registry.services.transactions import TransactionService

log = get_logger(__name__)

# (required current status, audit row type, audit row status) per action.
_TRANSITIONS: dict[str, tuple[frozenset[OfferStatus], TransactionType, str]] = {
    "accept": (frozenset({OfferStatus.pending}), TransactionType.offer_accepted, "PENDING"),
    "reject": (frozenset({OfferStatus.pending}), TransactionType.offer_rejected, "CANCELLED"),
    "verify": (
        frozenset({OfferStatus.accepted}),
        TransactionType.offer_verified,
        "VERIFIED",
    ),
    "complete": (
        frozenset({OfferStatus.admin_verified}),
        TransactionType.property_transferred,
        "COMPLETED",
    ),
    "cancel": (
        frozenset(set(OfferStatus) - {OfferStatus.completed, OfferStatus.cancelled}),
        TransactionType.offer_cancelled,
        "CANCELLED",
    ),
}


class OfferService:
    def __init__(self, *, session: AsyncSession, ledger: Ledger) -> None:
        self._session = session
        self._ledger = ledger
        self._offers = OfferRepo(session)
        self._properties = PropertyRepo(session)
        self._transactions = TransactionService(session=session)

    async def _load(self, offer_id: str, *, for_update: bool = True) -> Offer:
        offer = await self._offers.get(offer_id, for_update=for_update)
        if offer is None:
            raise NotFoundError("Offer", offer_id)
        return offer

    def _check(self, offer: Offer, action: str) -> tuple[TransactionType, str]:
        allowed, tx_type, tx_status = _TRANSITIONS[action]
        if offer.status not in allowed:
            raise InvalidTransitionError("Offer", offer.offer_id, offer.status.value, action)
        return tx_type, tx_status

    async def _record(self, offer: Offer, tx_type: TransactionType, tx_status: str) -> None:
        await self._transactions.record(
            tx_type,
            property_id=offer.property_id,
            from_owner=offer.seller_id,
            to_owner=offer.buyer_id,
            amount=offer.offer_amount,
            status=tx_status,
            offer_id=offer.offer_id,
        )

    async def create(
        self,
        *,
        property_id: str,
        buyer_id: str,
        offer_amount: float,
        offer_id: str | None = None,
        buyer_name: str = "",
        seller_id: str | None = None,
        seller_name: str | None = None,
        message: str = "",
    ) -> Offer:
        prop = await self._properties.get(property_id)
        if prop is None:
            raise NotFoundError("Property", property_id)
        seller_id = seller_id or prop.owner
        seller_name = prop.owner_name if seller_name is None else seller_name
        if buyer_id == seller_id:
            raise ValidationFailedError("buyer and seller must be different users")

        offer_id = offer_id or new_id("OFFER")
        if await self._offers.get(offer_id) is not None:
            raise ConflictError(f"offer {offer_id} already exists")

        await self._ledger.submit(
            OFFER_CONTRACT,
            "CreateOffer",
            offer_id,
            property_id,
            buyer_id,
            buyer_name,
            seller_id,
            seller_name,
            offer_amount,
            message,
        )
        now = utcnow()
        offer = await self._offers.create(
            offer_id=offer_id,
            property_id=property_id,
            buyer_id=buyer_id,
            buyer_name=buyer_name,
            seller_id=seller_id,
            seller_name=seller_name,
            offer_amount=offer_amount,
            message=message,
            created_at=now,
            updated_at=now,
        )
        await self._transactions.record(
            TransactionType.offer_created,
            property_id=property_id,
            from_owner=buyer_id,
            to_owner=seller_id,
            amount=offer_amount,
            status="PENDING",
            offer_id=offer_id,
        )
        await self._session.commit()
        log.info("offer_created", offer_id=offer_id, property_id=property_id, buyer_id=buyer_id)
        return offer

    async def get(self, offer_id: str) -> Offer:
        return await self._load(offer_id, for_update=False)

    async def list(
        self,
        *,
        property_id: str | None = None,
        buyer_id: str | None = None,
        seller_id: str | None = None,
        status: OfferStatus | None = None,
    ) -> list[Offer]:
        return await self._offers.list(
            property_id=property_id, buyer_id=buyer_id, seller_id=seller_id, status=status
        )

    async def pending_admin_verifications(self) -> list[Offer]:
        return await self._offers.list(status=OfferStatus.accepted)

    async def accept(self, offer_id: str) -> Offer:
        offer = await self._load(offer_id)
        tx_type, tx_status = self._check(offer, "accept")

        await self._ledger.submit(OFFER_CONTRACT, "AcceptOffer", offer_id)
        offer.status = OfferStatus.accepted
        offer.updated_at = utcnow()
        await self._record(offer, tx_type, tx_status)
        await self._session.commit()
        log.info("offer_accepted", offer_id=offer_id)
        return offer

    async def reject(self, offer_id: str) -> Offer:
        offer = await self._load(offer_id)
        tx_type, tx_status = self._check(offer, "reject")

        await self._ledger.submit(OFFER_CONTRACT, "RejectOffer", offer_id)
        offer.status = OfferStatus.rejected
        offer.updated_at = utcnow()
        await self._record(offer, tx_type, tx_status)
        await self._session.commit()
        log.info("offer_rejected", offer_id=offer_id)
        return offer

    async def admin_verify(self, offer_id: str, *, admin_id: str, sepolia_tx_hash: str) -> Offer:
        offer = await self._load(offer_id)
        tx_type, tx_status = self._check(offer, "verify")

        await self._ledger.submit(
            OFFER_CONTRACT, "AdminVerifyOffer", offer_id, admin_id, sepolia_tx_hash
        )
        now = utcnow()
        offer.status = OfferStatus.admin_verified
        offer.admin_verified = True
        offer.admin_id = admin_id
        offer.verified_at = now
        offer.sepolia_tx_hash = sepolia_tx_hash
        offer.updated_at = now
        await self._record(offer, tx_type, tx_status)
        await self._session.commit()
        log.info("offer_admin_verified", offer_id=offer_id, admin_id=admin_id)
        return offer

    async def complete(
        self, offer_id: str, *, transfer: bool = True, transaction_id: str | None = None
    ) -> Offer:
        offer = await self._load(offer_id)
        tx_type, tx_status = self._check(offer, "complete")

        if transfer:
            # The admin dashboard may transfer the title itself before completing the offer.
            prop = await self._properties.get(offer.property_id, for_update=True)
            transfer = prop is None or prop.owner != offer.buyer_id
        if transfer:
            # The transfer appends the PROPERTY_TRANSFERRED row for this offer.
            await PropertyService(session=self._session, ledger=self._ledger).transfer(
                offer.property_id,
                new_owner=offer.buyer_id,
                new_owner_name=offer.buyer_name,
                transaction_id=transaction_id,
                amount=offer.offer_amount,
                offer_id=offer.offer_id,
                commit=False,
            )
        await self._ledger.submit(OFFER_CONTRACT, "CompleteOffer", offer_id)
        offer.status = OfferStatus.completed
        offer.updated_at = utcnow()
        if not transfer:
            await self._record(offer, tx_type, tx_status)
        await self._session.commit()
        log.info("offer_completed", offer_id=offer_id, transferred=transfer)
        return offer

    async def cancel(self, offer_id: str) -> Offer:
        offer = await self._load(offer_id)
        tx_type, tx_status = self._check(offer, "cancel")

        await self._ledger.submit(OFFER_CONTRACT, "CancelOffer", offer_id)
        offer.status = OfferStatus.cancelled
        offer.updated_at = utcnow()
        await self._record(offer, tx_type, tx_status)
        await self._session.commit()
        log.info("offer_cancelled", offer_id=offer_id)
        return offer

    async def history(self, offer_id: str) -> list[Transaction]:
        await self._load(offer_id, for_update=False)
        return await self._transactions.list(offer_id=offer_id)


# --- Module Notes -----------------------------------------------------------
# Guards run before the ledger call, so an out-of-order request never reaches Fabric.
