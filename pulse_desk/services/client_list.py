"""Client list filtering and empty-state rules."""

from __future__ import annotations

from typing import Iterable

from ..schemas.client import Client

LOADING_FAILED = "loading_failed"
EMPTY = "empty"
NO_RESULTS = "no_results"
OK = "ok"


def matches(client: Client, term: str) -> bool:
    needle = term.lower()
    return any(
        needle in value.lower()
        for value in (client.name, client.company, client.email)
        if value
    )


def filter_clients(clients: Iterable[Client], term: str | None) -> list[Client]:
    """Case-insensitive substring match on name, company and email.

    An empty term returns the loaded set unchanged; any other term, spaces
    included, is matched as typed.
    """
    clients = list(clients)
    if not term:
        return clients
    return [c for c in clients if matches(c, term)]


def list_state(loaded: list[Client], filtered: list[Client], *, failed: bool = False) -> str:
    if failed:
        return LOADING_FAILED
    if not loaded:
        return EMPTY
    if not filtered:
        return NO_RESULTS
    return OK
