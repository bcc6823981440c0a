"""
landchain_registry.db.repositories.transactions

Repository for `Transaction` audit rows.

Responsibilities:
- Append audit rows produced as a side effect of registry writes.
- Query the audit trail by user, property or offer for the history views.
"""

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import Transaction


class TransactionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        transaction_id: str,
        type: str,
        property_id: str = "",
        from_owner: str = "",
        to_owner: str = "",
        amount: float = 0.0,
        status: str = "COMPLETED",
        offer_id: str = "",
    ) -> Transaction:
        # Rows are append-only; nothing in the service updates or deletes them.
        tx = Transaction(
            transaction_id=transaction_id,
            type=type,
            property_id=property_id,
            from_owner=from_owner,
            to_owner=to_owner,
            amount=amount,
            status=status,
            offer_id=offer_id,
        )
        self._session.add(tx)
        await self._session.flush()
        return tx

    async def get(self, transaction_id: str) -> Transaction | None:
        return await self._session.get(Transaction, transaction_id)

    async def list(
        self,
        *,
        user_id: str | None = None,
        property_id: str | None = None,
        offer_id: str | None = None,
    ) -> list[Transaction]:
        # Oldest-first, matching the order rows were appended.
        stmt = select(Transaction).order_by(Transaction.timestamp, Transaction.transaction_id)
        if user_id is not None:
            stmt = stmt.where(
                or_(Transaction.from_owner == user_id, Transaction.to_owner == user_id)
            )
        if property_id is not None:
            stmt = stmt.where(Transaction.property_id == property_id)
        if offer_id is not None:
            stmt = stmt.where(Transaction.offer_id == offer_id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Transaction)
        return (await self._session.execute(stmt)).scalar_one()
