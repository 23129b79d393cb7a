"""Async test fixtures for Pulse Desk using in-memory SQLite and a fake store."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pulse_desk.backend.base import TableStore
from pulse_desk.backend.sql import SQLAuthBackend, SQLTableStore
from pulse_desk.config import settings
from pulse_desk.errors import StorageError
from pulse_desk.models.base import Base

TEST_EMAIL = "owner@nexapulse.com.br"
TEST_PASSWORD = "s3cret-pass"

VALID_CLIENT_FORM = {
    "name": "Maria Santos",
    "tax_id": "123.456.789-00",
    "email": "maria@x.com",
    "sector": "Tech",
    "lead_source": "Referral",
}


class FakeTableStore(TableStore):
    """In-memory TableStore with call recording and failure injection.

    ``fail_on`` holds ``(operation, table)`` pairs; ``"*"`` matches any table.
    """

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {"clients": [], "activities": []}
        self.calls: list[tuple[str, str]] = []
        self.fail_on: set[tuple[str, str]] = set()
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _check(self, op: str, table: str) -> None:
        self.calls.append((op, table))
        if (op, table) in self.fail_on or (op, "*") in self.fail_on:
            raise StorageError(f"injected {op} failure on {table}")

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())

    async def select(self, table, *, filters=None, order_by=None, descending=False, limit=None):
        self._check("select", table)
        rows = [dict(r) for r in self.tables[table] if self._matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: r[order_by], reverse=descending)
        return rows[:limit] if limit else rows

    async def insert(self, table, row):
        self._check("insert", table)
        self._clock += timedelta(seconds=1)
        stored = {**row, "id": str(uuid.uuid4()), "created_at": self._clock, "updated_at": self._clock}
        self.tables[table].append(stored)
        return dict(stored)

    async def delete(self, table, *, filters):
        self._check("delete", table)
        before = len(self.tables[table])
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, filters)]
        return before - len(self.tables[table])

    async def count(self, table):
        self._check("count", table)
        return len(self.tables[table])

    def mutations(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] in ("insert", "delete")]


@pytest.fixture
def fake_store() -> FakeTableStore:
    return FakeTableStore()


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def sql_store(session_factory) -> SQLTableStore:
    return SQLTableStore(session_factory)


@pytest_asyncio.fixture
async def auth_backend(session_factory) -> SQLAuthBackend:
    return SQLAuthBackend(session_factory, session_ttl_seconds=3600)


@pytest_asyncio.fixture
async def app_store(sql_store):
    """Store served to the app; tests may swap it for a FakeTableStore."""
    return sql_store


@pytest_asyncio.fixture
async def client(app_store, auth_backend):
    """HTTPX async test client against the Pulse Desk app."""
    from pulse_desk.app import app
    from pulse_desk.deps import get_auth_backend, get_store

    app.dependency_overrides[get_store] = lambda: app_store
    app.dependency_overrides[get_auth_backend] = lambda: auth_backend

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def signed_in(client: AsyncClient, auth_backend: SQLAuthBackend):
    """Register an account and attach its session cookie to ``client``."""
    await auth_backend.sign_up(TEST_EMAIL, TEST_PASSWORD)
    session = await auth_backend.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD)
    client.cookies.set(settings.auth_cookie_name, session.access_token)
    return session
