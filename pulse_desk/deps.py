"""FastAPI dependencies: backend selection and the per-request session."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Request

from .backend.base import AuthBackend, TableStore
from .backend.session import SessionContext
from .config import settings
from .services.activity_log import ActivityLog
from .services.client_repo import ClientRepository


@lru_cache
def _rest_client():
    from .backend.rest import RestClient

    return RestClient(
        settings.backend_url,
        settings.backend_api_key,
        timeout=settings.backend_timeout_seconds,
    )


@lru_cache
def get_store() -> TableStore:
    if settings.uses_rest_backend:
        from .backend.rest import RestTableStore

        return RestTableStore(_rest_client())
    from .backend.sql import SQLTableStore
    from .database import async_session_factory

    return SQLTableStore(async_session_factory)


@lru_cache
def get_auth_backend() -> AuthBackend:
    if settings.uses_rest_backend:
        from .backend.rest import RestAuthBackend

        return RestAuthBackend(_rest_client())
    from .backend.sql import SQLAuthBackend
    from .database import async_session_factory

    return SQLAuthBackend(
        async_session_factory,
        session_ttl_seconds=settings.auth_session_ttl_seconds,
    )


async def get_session_context(
    request: Request,
    auth: AuthBackend = Depends(get_auth_backend),
) -> SessionContext:
    token = request.cookies.get(settings.auth_cookie_name)
    return SessionContext(await auth.get_session(token))


def get_table_store(
    ctx: SessionContext = Depends(get_session_context),
    store: TableStore = Depends(get_store),
) -> TableStore:
    return store.for_session(ctx.session)


def get_activity_log(store: TableStore = Depends(get_table_store)) -> ActivityLog:
    return ActivityLog(store)


def get_repository(
    store: TableStore = Depends(get_table_store),
    activity_log: ActivityLog = Depends(get_activity_log),
) -> ClientRepository:
    return ClientRepository(store, activity_log)
