"""Async database engine and session factory for the SQL backend."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings

engine = create_async_engine(settings.database_url, echo=settings.echo_sql)
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(target: AsyncEngine | None = None) -> None:
    """Create all tables (SQLite/local dev; hosted databases manage their own schema)."""
    from .models import Base

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
