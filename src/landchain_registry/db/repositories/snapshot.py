"""
landchain_registry.db.repositories.snapshot

Whole-collection export/replace used by the frontend sync endpoints.

Responsibilities:
- Load every row of a registry collection.
- Replace a collection wholesale inside the caller's transaction.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.base import Base
from landchain_registry.db.models import Escrow, Offer, Property, Transaction, User

COLLECTIONS: dict[str, type[Base]] = {
    "users": User,
    "properties": Property,
    "offers": Offer,
    "transactions": Transaction,
    "escrows": Escrow,
}


def primary_key(collection: str) -> str:
    return inspect(COLLECTIONS[collection]).primary_key[0].key


class SnapshotRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def load(self, collection: str) -> list[Any]:
        model = COLLECTIONS[collection]
        return list((await self._session.execute(select(model))).scalars().all())

    async def replace(self, collection: str, rows: list[dict[str, Any]]) -> int:
        model = COLLECTIONS[collection]
        await self._session.execute(delete(model))
        self._session.add_all(model(**row) for row in rows)
        await self._session.flush()
        return len(rows)
