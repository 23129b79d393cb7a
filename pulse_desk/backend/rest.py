"""Hosted backend-as-a-service over HTTP.

Tables are served PostgREST-style under ``/rest/v1/<table>`` and auth
GoTrue-style under ``/auth/v1/*``. Requests carry the project API key plus
the signed-in user's access token so row-level security applies.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx

from ..errors import AuthError, StorageError
from ..security import normalize_email
from .base import AuthBackend, AuthSession, TableStore

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


def _jsonable(row: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value.isoformat() if isinstance(value, (date, datetime)) else value
        for key, value in row.items()
    }


def _parse_content_range(header: str | None) -> int:
    """Total from a ``Content-Range`` header such as ``0-0/42`` or ``*/0``."""
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1].strip()
    return int(total) if total.isdigit() else 0


class RestClient:
    """Thin httpx wrapper shared by the table store and the auth backend.

    Usage:
        client = RestClient("https://xyz.example.co", api_key="...")
        store = RestTableStore(client)
        rows = await store.select("clients", order_by="created_at", descending=True)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url or not api_key:
            raise ValueError("REST backend needs both a base URL and an API key")
        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"apikey": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict | None = None,
        json: Any = None,
        headers: dict | None = None,
    ) -> httpx.Response:
        """Send a request; transport failures become StorageError."""
        request_headers = {"Authorization": f"Bearer {token or self.api_key}"}
        request_headers.update(headers or {})
        try:
            return await self._client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            raise StorageError(f"Backend unreachable: {e}")


class RestTableStore(TableStore):
    def __init__(self, client: RestClient, access_token: str | None = None):
        self._client = client
        self._token = access_token

    def for_session(self, session: AuthSession | None) -> RestTableStore:
        return RestTableStore(self._client, session.access_token if session else None)

    async def close(self) -> None:
        await self._client.close()

    async def _send(self, method: str, table: str, **kwargs) -> httpx.Response:
        response = await self._client.request(
            method, f"/rest/v1/{table}", token=self._token, **kwargs
        )
        if response.status_code >= 400:
            raise StorageError(
                f"{method} {table} failed: {_error_message(response)}",
                response.status_code,
            )
        return response

    @staticmethod
    def _filter_params(filters: dict[str, Any] | None) -> dict[str, str]:
        return {key: f"eq.{value}" for key, value in (filters or {}).items()}

    async def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params = {"select": "*", **self._filter_params(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit:
            params["limit"] = str(limit)
        response = await self._send("GET", table, params=params)
        return list(response.json())

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        response = await self._send(
            "POST", table,
            json=_jsonable(row),
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            raise StorageError(f"insert into {table} returned no row")
        return rows[0]

    async def delete(self, table: str, *, filters: dict[str, Any]) -> int:
        if not filters:
            raise StorageError("Refusing to delete without a filter", 400)
        response = await self._send(
            "DELETE", table,
            params=self._filter_params(filters),
            headers={"Prefer": "return=representation"},
        )
        return len(response.json() or [])

    async def count(self, table: str) -> int:
        response = await self._send(
            "GET", table,
            params={"select": "id", "limit": "1"},
            headers={"Prefer": "count=exact"},
        )
        return _parse_content_range(response.headers.get("content-range"))


class RestAuthBackend(AuthBackend):
    def __init__(self, client: RestClient):
        self._client = client

    async def close(self) -> None:
        await self._client.close()

    async def _auth_request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, f"/auth/v1/{path}", **kwargs)
        except StorageError as e:
            raise AuthError(e.message, 503)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = await self._auth_request(
            "POST", "token",
            params={"grant_type": "password"},
            json={"email": normalize_email(email), "password": password},
        )
        if response.status_code >= 400:
            raise AuthError(_error_message(response), response.status_code)

        body = response.json()
        expires_in = body.get("expires_in")
        expires_at = (
            datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))
            if expires_in else None
        )
        user = body.get("user") or {}
        return AuthSession(
            email=normalize_email(user.get("email") or email),
            access_token=body["access_token"],
            expires_at=expires_at,
        )

    async def sign_up(self, email: str, password: str) -> str:
        response = await self._auth_request(
            "POST", "signup",
            json={"email": normalize_email(email), "password": password},
        )
        if response.status_code >= 400:
            raise AuthError(_error_message(response), response.status_code)
        body = response.json()
        user = body.get("user") or body
        return normalize_email(user.get("email") or email)

    async def get_session(self, access_token: str | None) -> AuthSession | None:
        if not access_token:
            return None
        try:
            response = await self._auth_request("GET", "user", token=access_token)
        except AuthError:
            logger.warning("Session lookup failed", exc_info=True)
            return None
        if response.status_code != 200:
            return None
        email = response.json().get("email")
        if not email:
            return None
        return AuthSession(email=normalize_email(email), access_token=access_token)

    async def sign_out(self, access_token: str | None) -> None:
        if not access_token:
            return
        try:
            response = await self._auth_request("POST", "logout", token=access_token)
        except AuthError:
            logger.warning("Sign out request failed", exc_info=True)
            return
        if response.status_code >= 400:
            logger.warning("Sign out rejected: %s", _error_message(response))
