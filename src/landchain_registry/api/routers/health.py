"""
landchain_registry.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Registry status (`/api/health`): ledger mode and record counts.
- Liveness (`/healthz`) and readiness (`/readyz`) checks.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.api.deps import db_session, ledger_dep
from landchain_registry.db.repositories.offers import OfferRepo
from landchain_registry.db.repositories.properties import PropertyRepo
from landchain_registry.db.repositories.transactions import TransactionRepo
from landchain_registry.db.repositories.users import UserRepo
from landchain_registry.ledger.base import Ledger

router = APIRouter()


@router.get("/api/health")
async def registry_health(
    session: AsyncSession = Depends(db_session), ledger: Ledger = Depends(ledger_dep)
) -> dict[str, Any]:
    return {
        "status": "OK",
        "mode": ledger.mode,
        "fabricConnected": ledger.mode == "FABRIC",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "stats": {
            "users": await UserRepo(session).count(),
            "properties": await PropertyRepo(session).count(),
            "offers": await OfferRepo(session).count(),
            "transactions": await TransactionRepo(session).count(),
        },
    }


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
