"""Activity service - append-only audit trail."""

from __future__ import annotations

from ..backend.base import TableStore
from ..schemas.activity import Activity

TABLE = "activities"


class ActivityLog:
    def __init__(self, store: TableStore):
        self._store = store

    async def record(
        self,
        type: str,
        entity_type: str,
        entity_id: str | None,
        description: str | None = None,
    ) -> Activity:
        row = await self._store.insert(TABLE, {
            "type": type,
            "entity_type": entity_type,
            "entity_id": str(entity_id) if entity_id is not None else None,
            "description": description,
        })
        return Activity.model_validate(row)

    async def recent(self, limit: int = 5) -> list[Activity]:
        rows = await self._store.select(
            TABLE, order_by="created_at", descending=True, limit=limit
        )
        return [Activity.model_validate(r) for r in rows]
