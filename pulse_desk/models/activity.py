"""Activity model - append-only audit trail."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin, TimestampMixin


class Activity(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "activities"

    type: Mapped[str] = mapped_column(String(50), index=True)  # client_added, client_deleted, ...
    entity_type: Mapped[str | None] = mapped_column(String(50), default=None)
    # Weak reference: no foreign key, the entity may already be gone
    entity_id: Mapped[str | None] = mapped_column(String(64), default=None, index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)

    def __repr__(self) -> str:
        return f"<Activity {self.type} {self.entity_type}>"
