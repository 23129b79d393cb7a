"""Reports panel - static summary cards."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..backend.session import SessionContext
from ..deps import get_session_context
from ..navigation import page_context
from ..services.dashboard_svc import StatCard
from ..templating import templates

router = APIRouter(tags=["reports"])

REPORT_CARDS: tuple[StatCard, ...] = (
    StatCard("Monthly performance", "+25%", "Growth this month", placeholder=True),
    StatCard("New clients", "8", "This month", placeholder=True),
    StatCard("Signed contracts", "12", "Total in period", placeholder=True),
)


@router.get("/reports")
async def reports(request: Request, ctx: SessionContext = Depends(get_session_context)):
    return templates.TemplateResponse(
        request,
        "reports.html",
        page_context(request, ctx, "reports", cards=REPORT_CARDS),
    )
