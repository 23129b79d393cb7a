"""FastAPI application for Pulse Desk."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.uses_rest_backend:
        if not settings.backend_url or not settings.backend_api_key:
            raise RuntimeError(
                "PULSE_BACKEND=rest requires PULSE_BACKEND_URL and PULSE_BACKEND_API_KEY"
            )
    else:
        # The hosted backend manages its own schema
        from .database import create_tables
        await create_tables()
    yield

    from .deps import get_auth_backend, get_store
    await get_store().close()
    await get_auth_backend().close()
    if not settings.uses_rest_backend:
        from .database import engine
        await engine.dispose()


app = FastAPI(title=settings.app_title, lifespan=lifespan)
app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

# Import and register routers
from .routers import (  # noqa: E402
    home, dashboard, tasks, clients, contracts, reports, auth, health,
)

app.include_router(home.router)
app.include_router(dashboard.router)
app.include_router(tasks.router)
app.include_router(clients.router)
app.include_router(contracts.router)
app.include_router(reports.router)
app.include_router(auth.router)
app.include_router(health.router)
