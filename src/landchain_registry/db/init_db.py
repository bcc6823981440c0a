"""
landchain_registry.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Drop tables when a test needs a clean slate.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from landchain_registry.db import models  # noqa: F401  # registers tables on Base.metadata
from landchain_registry.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Production deployments run Alembic instead.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
