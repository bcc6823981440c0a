from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import Escrow, EscrowStatus


class EscrowRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self, *, escrow_id: str, property_id: str, buyer: str, seller: str, amount: float
    ) -> Escrow:
        escrow = Escrow(
            escrow_id=escrow_id,
            property_id=property_id,
            buyer=buyer,
            seller=seller,
            amount=amount,
            status=EscrowStatus.created,
            transaction_hash="",
        )
        self._session.add(escrow)
        await self._session.flush()
        return escrow

    async def get(self, escrow_id: str, *, for_update: bool = False) -> Escrow | None:
        return await self._session.get(Escrow, escrow_id, with_for_update=for_update)

    async def list(self, *, property_id: str | None = None) -> list[Escrow]:
        stmt = select(Escrow).order_by(Escrow.created_at)
        if property_id is not None:
            stmt = stmt.where(Escrow.property_id == property_id)
        return list((await self._session.execute(stmt)).scalars().all())
