from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import Property, PropertyStatus


class PropertyRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, property_id: str, **fields: Any) -> Property:
        prop = Property(
            property_id=property_id,
            status=PropertyStatus.pending,
            listed_for_sale=False,
            documents=[],
            verified_by="",
            verified_at=None,
            views=0,
            **fields,
        )
        self._session.add(prop)
        await self._session.flush()
        return prop

    async def get(self, property_id: str, *, for_update: bool = False) -> Property | None:
        return await self._session.get(Property, property_id, with_for_update=for_update)

    async def list(
        self,
        *,
        owner: str | None = None,
        status: PropertyStatus | None = None,
        property_type: str | None = None,
        listed: bool | None = None,
    ) -> list[Property]:
        stmt = select(Property).order_by(Property.registered_at)
        if owner is not None:
            stmt = stmt.where(Property.owner == owner)
        if status is not None:
            stmt = stmt.where(Property.status == status)
        if property_type is not None:
            stmt = stmt.where(Property.property_type == property_type)
        if listed is not None:
            stmt = stmt.where(Property.listed_for_sale.is_(listed))
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Property)
        return (await self._session.execute(stmt)).scalar_one()
