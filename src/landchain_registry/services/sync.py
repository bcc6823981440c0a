"""
landchain_registry.services.sync

Bulk export/import of registry collections for the frontend's local store.

Responsibilities:
- Dump every collection in wire format (`GET /api/data`).
- Replace the collections present in a sync payload (`POST /api/sync`) atomically.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.repositories.snapshot import COLLECTIONS, SnapshotRepo, primary_key
from landchain_registry.errors import ValidationFailedError
from landchain_registry.observability.logging import get_logger
from landchain_registry.schemas import RECORD_TYPES, CamelModel, UserRecord

log = get_logger(__name__)


def _to_row(record: CamelModel) -> dict[str, Any]:
    row = record.model_dump()
    if isinstance(record, UserRecord):
        # JSON column: documents must hold plain JSON values.
        row["documents"] = [d.model_dump(mode="json") for d in record.documents]
    return row


# Columns besides the primary key that carry a UNIQUE constraint.
_UNIQUE_FIELDS: dict[str, tuple[str, ...]] = {"users": ("email",)}


def _check_unique(name: str, rows: list[dict[str, Any]]) -> None:
    for key in (primary_key(name), *_UNIQUE_FIELDS.get(name, ())):
        seen: set[Any] = set()
        for row in rows:
            if row[key] in seen:
                label = "id" if key == primary_key(name) else key
                raise ValidationFailedError(f"duplicate {name} {label} {row[key]}")
            seen.add(row[key])


class SyncService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._snapshots = SnapshotRepo(session)

    async def export(self) -> dict[str, list[CamelModel]]:
        out: dict[str, list[CamelModel]] = {}
        for name in COLLECTIONS:
            record_type = RECORD_TYPES[name]
            out[name] = [record_type.model_validate(r) for r in await self._snapshots.load(name)]
        return out

    async def replace(self, payload: dict[str, Any]) -> dict[str, int]:
        parsed: dict[str, list[dict[str, Any]]] = {}
        for name, items in payload.items():
            if name not in COLLECTIONS or items is None:
                continue
            if not isinstance(items, list):
                raise ValidationFailedError(f"{name} must be a list")
            try:
                parsed[name] = [_to_row(RECORD_TYPES[name].model_validate(i)) for i in items]
            except ValidationError as e:
                raise ValidationFailedError(f"invalid {name} record: {e.errors()[0]['msg']}") from e
            _check_unique(name, parsed[name])

        counts: dict[str, int] = {}
        for name, rows in parsed.items():
            counts[name] = await self._snapshots.replace(name, rows)
        await self._session.commit()
        log.info("data_synced", **counts)
        return counts
