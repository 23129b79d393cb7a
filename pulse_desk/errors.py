"""Exception hierarchy shared by backends, services and routes."""

from __future__ import annotations


class PulseError(Exception):
    """Base exception for Pulse Desk errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class StorageError(PulseError):
    """Backend table operation failed (transport, auth or constraint)."""

    pass


class ClientNotFound(StorageError):
    """No client row matched the requested identifier."""

    pass


class AuthError(PulseError):
    """Sign in / sign up rejected by the auth backend."""

    pass


class AuthenticationRequired(PulseError):
    """An action needs a signed-in session."""

    def __init__(self, message: str = "Authentication required", redirect_to: str = "/auth"):
        self.redirect_to = redirect_to
        super().__init__(message, 401)


class FormValidationError(PulseError):
    """Form input failed validation; ``errors`` maps field name to message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("Form validation failed", 422)


class ContractValidationError(PulseError):
    """Contract is missing the fields required to export or send it."""

    pass
