"""Activity schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator


class Activity(BaseModel):
    id: str
    type: str
    entity_type: str | None = None
    entity_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None

    @field_validator("id", "entity_id", mode="before")
    @classmethod
    def _to_str(cls, value):
        return str(value) if value is not None else value
