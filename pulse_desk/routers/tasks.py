"""Task board panel."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..backend.session import SessionContext
from ..deps import get_session_context
from ..navigation import page_context
from ..services.task_board import STATUS_LABELS, TASKS, group_by_status
from ..templating import templates

router = APIRouter(tags=["tasks"])


@router.get("/tasks")
async def task_board(request: Request, ctx: SessionContext = Depends(get_session_context)):
    return templates.TemplateResponse(
        request,
        "tasks.html",
        page_context(
            request, ctx, "tasks",
            columns=group_by_status(TASKS),
            status_labels=STATUS_LABELS,
        ),
    )
