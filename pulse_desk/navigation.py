"""Tab navigation shared by every page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import Request

from .backend.session import SessionContext
from .notifications import Notice, resolve_notice


@dataclass(frozen=True)
class Tab:
    id: str
    label: str
    path: str


TABS: list[Tab] = [
    Tab("dashboard", "Dashboard", "/dashboard"),
    Tab("tasks", "Tasks", "/tasks"),
    Tab("crm", "CRM", "/crm"),
    Tab("contracts", "Contracts", "/contracts"),
    Tab("reports", "Reports", "/reports"),
]

DEFAULT_TAB = "dashboard"


def resolve_tab(tab_id: str | None) -> Tab:
    """Unknown or missing ids fall back to the dashboard."""
    by_id = {t.id: t for t in TABS}
    return by_id.get((tab_id or "").strip().lower(), by_id[DEFAULT_TAB])


def page_context(
    request: Request,
    ctx: SessionContext,
    active_tab: str,
    *,
    notice: Notice | str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Template context for the sidebar/header shell."""
    if notice is None:
        notice = request.query_params.get("notice")
    if isinstance(notice, str):
        notice = resolve_notice(notice)
    return {
        "tabs": TABS,
        "active_tab": active_tab,
        "user_email": ctx.session.email if ctx.session else None,
        "notice": notice,
        **extra,
    }
