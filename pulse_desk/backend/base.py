"""Backend collaborator contract: table CRUD + auth sessions.

Services only talk to these two interfaces, so the SQL backend, the hosted
REST backend and in-memory test fakes are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuthSession:
    email: str
    access_token: str
    expires_at: datetime | None = None


class TableStore(ABC):
    """Row-level operations against named tables. Rows are plain dicts."""

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return rows matching all equality ``filters``."""

    @abstractmethod
    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored (ids, timestamps)."""

    @abstractmethod
    async def delete(self, table: str, *, filters: dict[str, Any]) -> int:
        """Delete rows matching ``filters``; returns the number removed."""

    @abstractmethod
    async def count(self, table: str) -> int:
        """Exact row count."""

    def for_session(self, session: AuthSession | None) -> TableStore:
        """Return a store that acts on behalf of ``session``."""
        return self

    async def close(self) -> None:
        pass


class AuthBackend(ABC):
    @abstractmethod
    async def get_session(self, access_token: str | None) -> AuthSession | None:
        """Resolve a token to a live session, or None."""

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Raises AuthError on bad credentials."""

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> str:
        """Register an account and return its normalized email."""

    @abstractmethod
    async def sign_out(self, access_token: str | None) -> None:
        """Revoke the session behind ``access_token`` if any."""

    async def close(self) -> None:
        pass
