"""User-facing notices carried across redirects as ``?notice=<code>``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notice:
    code: str
    title: str
    message: str
    level: str = "info"  # info | success | error


NOTICES: dict[str, Notice] = {n.code: n for n in (
    Notice("client_added", "Client added", "The client was saved successfully.", "success"),
    Notice("client_deleted", "Client deleted", "The client was removed.", "success"),
    Notice("client_duplicated", "Client duplicated", "A copy of the client was created.", "success"),
    Notice("client_not_found", "Client not found", "That client no longer exists.", "error"),
    Notice("storage_error", "Something went wrong", "We could not reach the database. Try again.", "error"),
    Notice("auth_required", "Sign in required", "You need to sign in to do that.", "error"),
    Notice("edit_unavailable", "Not available yet", "Editing clients is not available yet.", "info"),
    Notice("signed_in", "Welcome back", "You are signed in.", "success"),
    Notice("signed_up", "Account created", "Check your email if confirmation is required, then sign in.", "success"),
    Notice("signed_out", "Signed out", "You have been signed out.", "info"),
    Notice("contract_invalid", "Missing data", "Fill in at least the client name and contract value.", "error"),
)}


def resolve_notice(code: str | None) -> Notice | None:
    if not code:
        return None
    return NOTICES.get(code)
