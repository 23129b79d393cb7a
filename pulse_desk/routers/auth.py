"""Login, sign-up and logout.

The session cookie follows the session context: handlers subscribe a
listener that writes or clears the cookie on ``SIGNED_IN`` / ``SIGNED_OUT``.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, Response

from ..backend.base import AuthBackend, AuthSession
from ..backend.session import SIGNED_IN, SessionContext
from ..config import settings
from ..deps import get_auth_backend, get_session_context
from ..errors import AuthError
from ..navigation import page_context
from ..security import sanitize_next_path
from ..templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

MODES = ("login", "signup")


def _with_notice(path: str, code: str) -> str:
    return f"{path}{'&' if '?' in path else '?'}notice={code}"


def _cookie_listener(response: Response):
    def _on_change(event: str, session: AuthSession | None) -> None:
        if event == SIGNED_IN and session is not None:
            response.set_cookie(
                key=settings.auth_cookie_name,
                value=session.access_token,
                max_age=settings.auth_session_ttl_seconds,
                httponly=True,
                secure=settings.auth_cookie_secure,
                samesite="lax",
                path="/",
            )
        else:
            response.delete_cookie(settings.auth_cookie_name, path="/")

    return _on_change


def _render_auth(
    request: Request,
    ctx: SessionContext,
    *,
    mode: str,
    next_path: str,
    email: str = "",
    error: str | None = None,
    status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "auth/login.html",
        page_context(
            request, ctx, "auth",
            mode=mode if mode in MODES else "login",
            next_path=next_path,
            email=email,
            error=error,
        ),
        status_code=status_code,
    )


@router.get("/auth")
async def auth_page(
    request: Request,
    mode: str = "login",
    next: str | None = None,
    ctx: SessionContext = Depends(get_session_context),
):
    if ctx.is_authenticated:
        return RedirectResponse("/", status_code=303)
    return _render_auth(request, ctx, mode=mode, next_path=sanitize_next_path(next))


@router.post("/auth/login")
async def login(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    auth: AuthBackend = Depends(get_auth_backend),
):
    form = await request.form()
    email = str(form.get("email", "")).strip()
    password = str(form.get("password", ""))
    next_path = sanitize_next_path(str(form.get("next", "") or ""))

    try:
        session = await auth.sign_in_with_password(email, password)
    except AuthError as e:
        logger.warning("Login failed for %s: %s", email, e.message)
        return _render_auth(
            request, ctx,
            mode="login", next_path=next_path, email=email,
            error=e.message, status_code=401,
        )

    response = RedirectResponse(_with_notice(next_path, "signed_in"), status_code=303)
    unsubscribe = ctx.subscribe(_cookie_listener(response))
    ctx.set_session(session)
    unsubscribe()
    return response


@router.post("/auth/signup")
async def signup(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    auth: AuthBackend = Depends(get_auth_backend),
):
    form = await request.form()
    email = str(form.get("email", "")).strip()
    password = str(form.get("password", ""))
    next_path = sanitize_next_path(str(form.get("next", "") or ""))

    try:
        await auth.sign_up(email, password)
    except AuthError as e:
        return _render_auth(
            request, ctx,
            mode="signup", next_path=next_path, email=email,
            error=e.message, status_code=400,
        )
    return RedirectResponse(
        f"/auth?mode=login&next={quote(next_path, safe='/')}&notice=signed_up",
        status_code=303,
    )


@router.post("/auth/logout")
async def logout(
    request: Request,
    ctx: SessionContext = Depends(get_session_context),
    auth: AuthBackend = Depends(get_auth_backend),
):
    await auth.sign_out(request.cookies.get(settings.auth_cookie_name))

    response = RedirectResponse("/auth?notice=signed_out", status_code=303)
    unsubscribe = ctx.subscribe(_cookie_listener(response))
    ctx.set_session(None)
    unsubscribe()
    return response
