"""SQLAlchemy-backed table store and local auth backend."""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any

from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy import Date, DateTime, Uuid, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..errors import AuthError, StorageError
from ..models import Activity, AuthAccount, Base, Client
from ..models.auth import AuthSession as AuthSessionRow
from ..security import hash_password, issue_session_id, normalize_email, verify_password
from .base import AuthBackend, AuthSession, TableStore

logger = logging.getLogger(__name__)

TABLES: dict[str, type[Base]] = {
    "clients": Client,
    "activities": Activity,
}

MIN_PASSWORD_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


class _NoMatch(Exception):
    """A filter value can never match (e.g. malformed UUID)."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _coerce_date(value: object) -> date | None:
    """Coerce common date representations into a Python `date`.

    SQLAlchemy's SQLite Date type only binds real date objects.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def _coerce_datetime(value: object) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    return None


def _coerce(column, value: Any) -> Any:
    col_type = column.type
    if isinstance(col_type, Uuid):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
    if isinstance(col_type, DateTime):
        return _coerce_datetime(value)
    if isinstance(col_type, Date):
        return _coerce_date(value)
    return value


def _row_to_dict(obj: Base) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for column in obj.__table__.columns:
        value = getattr(obj, column.key)
        row[column.key] = str(value) if isinstance(value, uuid.UUID) else value
    return row


class SQLTableStore(TableStore):
    """TableStore over an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _model(self, table: str) -> type[Base]:
        try:
            return TABLES[table]
        except KeyError:
            raise StorageError(f"Unknown table: {table}", 404)

    def _where(self, stmt, model: type[Base], filters: dict[str, Any] | None):
        columns = model.__table__.columns
        for key, value in (filters or {}).items():
            if key not in columns:
                raise StorageError(f"Unknown column {key!r} on {model.__tablename__}", 400)
            try:
                coerced = _coerce(columns[key], value)
            except ValueError:
                raise _NoMatch(key)
            stmt = stmt.where(getattr(model, key) == coerced)
        return stmt

    async def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        model = self._model(table)
        try:
            stmt = self._where(select(model), model, filters)
        except _NoMatch:
            return []
        if order_by:
            if order_by not in model.__table__.columns:
                raise StorageError(f"Unknown column {order_by!r} on {table}", 400)
            col = getattr(model, order_by)
            stmt = stmt.order_by(col.desc() if descending else col.asc())
        if limit:
            stmt = stmt.limit(limit)
        try:
            async with self._session_factory() as db:
                rows = (await db.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise StorageError(f"select on {table} failed: {e}")
        return [_row_to_dict(r) for r in rows]

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        model = self._model(table)
        columns = model.__table__.columns
        values: dict[str, Any] = {}
        for key, value in row.items():
            if key not in columns:
                raise StorageError(f"Unknown column {key!r} on {table}", 400)
            try:
                values[key] = _coerce(columns[key], value)
            except ValueError:
                raise StorageError(f"Invalid value for {table}.{key}", 400)

        obj = model(**values)
        try:
            async with self._session_factory() as db:
                db.add(obj)
                await db.commit()
                await db.refresh(obj)
        except SQLAlchemyError as e:
            raise StorageError(f"insert into {table} failed: {e}")
        return _row_to_dict(obj)

    async def delete(self, table: str, *, filters: dict[str, Any]) -> int:
        if not filters:
            raise StorageError("Refusing to delete without a filter", 400)
        model = self._model(table)
        try:
            stmt = self._where(delete(model), model, filters)
        except _NoMatch:
            return 0
        try:
            async with self._session_factory() as db:
                result = await db.execute(stmt)
                removed = result.rowcount or 0
                await db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"delete from {table} failed: {e}")
        return removed

    async def count(self, table: str) -> int:
        model = self._model(table)
        try:
            async with self._session_factory() as db:
                total = (await db.execute(select(func.count()).select_from(model))).scalar()
        except SQLAlchemyError as e:
            raise StorageError(f"count on {table} failed: {e}")
        return int(total or 0)


class SQLAuthBackend(AuthBackend):
    """Email/password accounts and revocable sessions in the local database."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        session_ttl_seconds: int = 86400,
    ):
        self._session_factory = session_factory
        self._ttl = max(60, session_ttl_seconds)

    async def sign_up(self, email: str, password: str) -> str:
        email_norm = normalize_email(email)
        try:
            _email_adapter.validate_python(email_norm)
        except ValidationError:
            raise AuthError("Invalid email address", 400)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters", 400
            )

        password_hash = await asyncio.to_thread(hash_password, password)
        try:
            async with self._session_factory() as db:
                existing = (await db.execute(
                    select(AuthAccount).where(AuthAccount.email == email_norm)
                )).scalar_one_or_none()
                if existing:
                    raise AuthError("User already registered", 409)
                db.add(AuthAccount(email=email_norm, password_hash=password_hash))
                await db.commit()
        except IntegrityError:
            raise AuthError("User already registered", 409)
        except SQLAlchemyError as e:
            raise AuthError(f"Sign up failed: {e}", 503)
        return email_norm

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        email_norm = normalize_email(email)
        if not email_norm or not password:
            raise AuthError("Invalid login credentials", 401)

        now = _utcnow()
        try:
            async with self._session_factory() as db:
                account = (await db.execute(
                    select(AuthAccount).where(AuthAccount.email == email_norm)
                )).scalar_one_or_none()
                if not account or not account.is_active:
                    raise AuthError("Invalid login credentials", 401)
                if not await asyncio.to_thread(verify_password, password, account.password_hash):
                    raise AuthError("Invalid login credentials", 401)

                session_id = issue_session_id()
                expires_at = now + timedelta(seconds=self._ttl)
                db.add(AuthSessionRow(session_id=session_id, email=email_norm, expires_at=expires_at))
                account.last_login_at = now
                await db.commit()
        except SQLAlchemyError as e:
            raise AuthError(f"Sign in failed: {e}", 503)

        return AuthSession(email=email_norm, access_token=session_id, expires_at=expires_at)

    async def get_session(self, access_token: str | None) -> AuthSession | None:
        if not access_token:
            return None
        try:
            async with self._session_factory() as db:
                row = (await db.execute(
                    select(AuthSessionRow).where(AuthSessionRow.session_id == access_token)
                )).scalar_one_or_none()
                if not row or row.revoked_at is not None:
                    return None
                if _as_utc(row.expires_at) <= _utcnow():
                    return None
                account = (await db.execute(
                    select(AuthAccount).where(AuthAccount.email == row.email)
                )).scalar_one_or_none()
                if not account or not account.is_active:
                    return None
        except SQLAlchemyError:
            logger.warning("Session lookup failed", exc_info=True)
            return None
        return AuthSession(
            email=row.email,
            access_token=access_token,
            expires_at=_as_utc(row.expires_at),
        )

    async def sign_out(self, access_token: str | None) -> None:
        if not access_token:
            return
        try:
            async with self._session_factory() as db:
                row = (await db.execute(
                    select(AuthSessionRow).where(AuthSessionRow.session_id == access_token)
                )).scalar_one_or_none()
                if row and row.revoked_at is None:
                    row.revoked_at = _utcnow()
                    await db.commit()
        except SQLAlchemyError:
            logger.warning("Session revocation failed", exc_info=True)
