from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import User, UserRole


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, user_id: str, role: UserRole, **fields: Any) -> User:
        user = User(user_id=user_id, role=role, is_verified=False, documents=[], **fields)
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: str, *, for_update: bool = False) -> User | None:
        return await self._session.get(User, user_id, with_for_update=for_update)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self, *, role: UserRole | None = None) -> list[User]:
        stmt = select(User).order_by(User.registered_at)
        if role is not None:
            stmt = stmt.where(User.role == role)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        return (await self._session.execute(select(func.count()).select_from(User))).scalar_one()
