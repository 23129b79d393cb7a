"""Login, sign-up and logout routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from pulse_desk.config import settings

from .conftest import TEST_EMAIL, TEST_PASSWORD


@pytest.mark.asyncio
async def test_auth_page_renders_modes(client: AsyncClient):
    resp = await client.get("/auth")
    assert resp.status_code == 200
    assert 'action="/auth/login"' in resp.text

    resp = await client.get("/auth", params={"mode": "signup"})
    assert 'action="/auth/signup"' in resp.text


@pytest.mark.asyncio
async def test_next_is_sanitised(client: AsyncClient):
    resp = await client.get("/auth", params={"next": "https://evil.example"})
    assert 'name="next" value="/"' in resp.text


@pytest.mark.asyncio
async def test_signup_then_login_sets_cookie(client: AsyncClient, auth_backend):
    resp = await client.post("/auth/signup", data={"email": TEST_EMAIL, "password": TEST_PASSWORD, "next": "/crm"})
    assert resp.status_code == 303
    assert "notice=signed_up" in resp.headers["location"]

    resp = await client.post("/auth/login", data={"email": TEST_EMAIL, "password": TEST_PASSWORD, "next": "/crm"})
    assert resp.status_code == 303
    assert resp.headers["location"] == "/crm?notice=signed_in"
    set_cookie = resp.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.auth_cookie_name}=")
    assert "httponly" in set_cookie.lower()

    token = resp.cookies[settings.auth_cookie_name]
    session = await auth_backend.get_session(token)
    assert session is not None and session.email == TEST_EMAIL


@pytest.mark.asyncio
async def test_bad_credentials(client: AsyncClient):
    resp = await client.post("/auth/login", data={"email": TEST_EMAIL, "password": "nope"})
    assert resp.status_code == 401
    assert "Invalid login credentials" in resp.text
    assert "set-cookie" not in resp.headers


@pytest.mark.asyncio
async def test_signup_error_rendered(client: AsyncClient):
    resp = await client.post("/auth/signup", data={"email": TEST_EMAIL, "password": "123"})
    assert resp.status_code == 400
    assert 'action="/auth/signup"' in resp.text


@pytest.mark.asyncio
async def test_signed_in_visitor_redirected_home(client: AsyncClient, signed_in):
    resp = await client.get("/auth")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"


@pytest.mark.asyncio
async def test_header_shows_user(client: AsyncClient, signed_in):
    resp = await client.get("/tasks")
    assert TEST_EMAIL in resp.text


@pytest.mark.asyncio
async def test_logout_revokes_and_clears_cookie(client: AsyncClient, signed_in, auth_backend):
    resp = await client.post("/auth/logout")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/auth?notice=signed_out"
    assert f'{settings.auth_cookie_name}=""' in resp.headers["set-cookie"]
    assert await auth_backend.get_session(signed_in.access_token) is None
