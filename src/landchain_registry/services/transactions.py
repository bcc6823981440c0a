"""
landchain_registry.services.transactions

Audit-row service.

Responsibilities:
- Append a transaction row for each state change the other services perform.
- Serve the transaction history queries.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import Transaction, TransactionType
from landchain_registry.db.repositories.transactions import TransactionRepo
from landchain_registry.errors import NotFoundError
from landchain_registry.observability.logging import get_logger
from landchain_registry.services.ids import new_transaction_id

log = get_logger(__name__)


class TransactionService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._repo = TransactionRepo(session)

    async def record(
        self,
        type: TransactionType,
        *,
        property_id: str = "",
        from_owner: str = "",
        to_owner: str = "",
        amount: float = 0.0,
        status: str = "COMPLETED",
        offer_id: str = "",
        transaction_id: str | None = None,
    ) -> Transaction:
        tx = await self._repo.add(
            transaction_id=transaction_id or new_transaction_id(),
            type=type.value,
            property_id=property_id,
            from_owner=from_owner,
            to_owner=to_owner,
            amount=amount,
            status=status,
            offer_id=offer_id,
        )
        log.info("transaction_recorded", type=tx.type, transaction_id=tx.transaction_id)
        return tx

    async def get(self, transaction_id: str) -> Transaction:
        tx = await self._repo.get(transaction_id)
        if tx is None:
            raise NotFoundError("Transaction", transaction_id)
        return tx

    async def list(
        self,
        *,
        user_id: str | None = None,
        property_id: str | None = None,
        offer_id: str | None = None,
    ) -> list[Transaction]:
        return await self._repo.list(user_id=user_id, property_id=property_id, offer_id=offer_id)
