"""Dashboard panel."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..backend.session import SessionContext
from ..deps import get_activity_log, get_repository, get_session_context
from ..navigation import page_context
from ..notifications import NOTICES
from ..services.activity_log import ActivityLog
from ..services.client_repo import ClientRepository
from ..services.dashboard_svc import build_summary
from ..templating import templates

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard")
async def dashboard(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    repo: ClientRepository = Depends(get_repository),
    activities: ActivityLog = Depends(get_activity_log),
):
    summary = await build_summary(repo, activities)
    notice = NOTICES["storage_error"] if summary.failed else None
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        page_context(request, ctx, "dashboard", notice=notice, summary=summary),
    )
