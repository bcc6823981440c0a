"""
landchain_registry.api.routers.data

Bulk data endpoints used by the frontend to mirror its local store.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.api.deps import db_session
from landchain_registry.schemas import envelope
from landchain_registry.services.sync import SyncService

router = APIRouter(prefix="/api", tags=["data"])


@router.get("/data")
async def dump_data(session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    snapshot = await SyncService(session=session).export()
    data = {
        name: [r.model_dump(by_alias=True, mode="json") for r in records]
        for name, records in snapshot.items()
    }
    return envelope(data)


@router.post("/sync")
async def sync_data(
    payload: dict[str, Any],
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    counts = await SyncService(session=session).replace(payload)
    return {"success": True, "message": "Data synced successfully", "counts": counts}
