from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import Offer, OfferStatus


class OfferRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, offer_id: str, **fields: Any) -> Offer:
        offer = Offer(
            offer_id=offer_id,
            status=OfferStatus.pending,
            admin_verified=False,
            admin_id="",
            verified_at=None,
            sepolia_tx_hash="",
            **fields,
        )
        self._session.add(offer)
        await self._session.flush()
        return offer

    async def get(self, offer_id: str, *, for_update: bool = False) -> Offer | None:
        return await self._session.get(Offer, offer_id, with_for_update=for_update)

    async def list(
        self,
        *,
        property_id: str | None = None,
        buyer_id: str | None = None,
        seller_id: str | None = None,
        status: OfferStatus | None = None,
    ) -> list[Offer]:
        stmt = select(Offer).order_by(Offer.created_at)
        if property_id is not None:
            stmt = stmt.where(Offer.property_id == property_id)
        if buyer_id is not None:
            stmt = stmt.where(Offer.buyer_id == buyer_id)
        if seller_id is not None:
            stmt = stmt.where(Offer.seller_id == seller_id)
        if status is not None:
            stmt = stmt.where(Offer.status == status)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        return (await self._session.execute(select(func.count()).select_from(Offer))).scalar_one()
