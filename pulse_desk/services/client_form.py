"""New-client form: field validation and authenticated submission."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import ValidationError

from ..backend.session import SessionContext
from ..errors import AuthenticationRequired, FormValidationError
from ..schemas.client import Client, ClientCreate
from .client_repo import ClientRepository

FIELD_MESSAGES: dict[str, str] = {
    "name": "Name must have at least 2 characters",
    "tax_id": "Tax id must have at least 11 characters",
    "email": "Enter a valid email address",
    "sector": "Sector must have at least 2 characters",
    "lead_source": "Lead source must have at least 2 characters",
}

LOGIN_REDIRECT = "/auth?next=/crm"


def validate_new_client(data: Mapping[str, Any]) -> ClientCreate:
    """Validate raw form input. Raises FormValidationError with per-field messages."""
    try:
        return ClientCreate.model_validate(dict(data))
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "__all__"
            errors.setdefault(field, FIELD_MESSAGES.get(field, err["msg"]))
        raise FormValidationError(errors)


async def submit_new_client(
    data: Mapping[str, Any],
    context: SessionContext,
    repo: ClientRepository,
    *,
    today: date | None = None,
) -> Client:
    """Validate, require a session, then create.

    Nothing reaches storage unless both checks pass.
    """
    fields = validate_new_client(data)
    if not context.is_authenticated:
        raise AuthenticationRequired(redirect_to=LOGIN_REDIRECT)
    return await repo.create(fields, today=today)
