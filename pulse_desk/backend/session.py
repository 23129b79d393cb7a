"""Per-request session context with auth-state change notification."""

from __future__ import annotations

from typing import Callable

from .base import AuthSession

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

AuthListener = Callable[[str, "AuthSession | None"], None]


class SessionContext:
    """Current session value plus subscribe-to-change.

    Built once per request from the session cookie and passed explicitly to
    whatever needs to know who is signed in.
    """

    def __init__(self, session: AuthSession | None = None):
        self._session = session
        self._listeners: list[AuthListener] = []

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener(event, session)``; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_session(self, session: AuthSession | None, event: str | None = None) -> None:
        self._session = session
        event = event or (SIGNED_IN if session else SIGNED_OUT)
        for listener in list(self._listeners):
            listener(event, session)
