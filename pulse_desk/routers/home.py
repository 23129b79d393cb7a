"""Root route: tab id -> panel."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from ..navigation import resolve_tab
from ..notifications import resolve_notice

router = APIRouter(tags=["navigation"])


@router.get("/")
async def home(tab: str | None = None, notice: str | None = None):
    target = resolve_tab(tab).path
    if resolve_notice(notice):
        target = f"{target}?notice={notice}"
    return RedirectResponse(target, status_code=303)
