"""CRM routes: client list, new-client form and row actions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from ..backend.session import SessionContext
from ..deps import get_repository, get_session_context
from ..errors import AuthenticationRequired, ClientNotFound, FormValidationError, StorageError
from ..navigation import page_context
from ..notifications import NOTICES
from ..schemas.client import ClientCreate
from ..services.client_form import LOGIN_REDIRECT, submit_new_client
from ..services.client_list import filter_clients, list_state
from ..services.client_repo import ClientRepository
from ..templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["crm"])

FORM_FIELDS = tuple(ClientCreate.model_fields)


def _to_list(notice: str) -> RedirectResponse:
    return RedirectResponse(f"/crm?notice={notice}", status_code=303)


def _to_login() -> RedirectResponse:
    return RedirectResponse(f"{LOGIN_REDIRECT}&notice=auth_required", status_code=303)


def _render_form(
    request: Request,
    ctx: SessionContext,
    *,
    values: dict | None = None,
    errors: dict | None = None,
    notice=None,
    status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "clients/form.html",
        page_context(
            request, ctx, "crm",
            notice=notice,
            values=values or {},
            errors=errors or {},
        ),
        status_code=status_code,
    )


@router.get("/crm")
async def client_list(
    request: Request,
    q: str | None = None,
    ctx: SessionContext = Depends(get_session_context),
    repo: ClientRepository = Depends(get_repository),
):
    failed = False
    try:
        loaded = await repo.list()
    except StorageError:
        logger.warning("Failed to load clients", exc_info=True)
        loaded, failed = [], True

    filtered = filter_clients(loaded, q)
    return templates.TemplateResponse(
        request,
        "clients/list.html",
        page_context(
            request, ctx, "crm",
            notice=NOTICES["storage_error"] if failed else None,
            clients=filtered,
            total=len(loaded),
            search=q or "",
            state=list_state(loaded, filtered, failed=failed),
        ),
    )


@router.get("/crm/new")
async def client_new(request: Request, ctx: SessionContext = Depends(get_session_context)):
    return _render_form(request, ctx)


@router.post("/crm/clients")
async def client_create(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    repo: ClientRepository = Depends(get_repository),
):
    form = await request.form()
    values = {key: str(form.get(key, "")) for key in FORM_FIELDS}
    try:
        await submit_new_client(values, ctx, repo)
    except FormValidationError as e:
        return _render_form(request, ctx, values=values, errors=e.errors, status_code=422)
    except AuthenticationRequired as e:
        return RedirectResponse(f"{e.redirect_to}&notice=auth_required", status_code=303)
    except StorageError:
        logger.warning("Failed to create client", exc_info=True)
        return _render_form(
            request, ctx,
            values=values,
            notice=NOTICES["storage_error"],
            status_code=502,
        )
    return _to_list("client_added")


@router.get("/crm/clients/{client_id}/edit")
async def client_edit(client_id: str):
    return _to_list("edit_unavailable")


@router.post("/crm/clients/{client_id}/delete")
async def client_delete(
    client_id: str,
    ctx: SessionContext = Depends(get_session_context),
    repo: ClientRepository = Depends(get_repository),
):
    if not ctx.is_authenticated:
        return _to_login()
    try:
        await repo.delete(client_id)
    except ClientNotFound:
        return _to_list("client_not_found")
    except StorageError:
        logger.warning("Failed to delete client %s", client_id, exc_info=True)
        return _to_list("storage_error")
    return _to_list("client_deleted")


@router.post("/crm/clients/{client_id}/duplicate")
async def client_duplicate(
    client_id: str,
    ctx: SessionContext = Depends(get_session_context),
    repo: ClientRepository = Depends(get_repository),
):
    if not ctx.is_authenticated:
        return _to_login()
    try:
        client = await repo.get(client_id)
        if client is None:
            return _to_list("client_not_found")
        await repo.duplicate(client)
    except StorageError:
        logger.warning("Failed to duplicate client %s", client_id, exc_info=True)
        return _to_list("storage_error")
    return _to_list("client_duplicated")
