from .base import AuthBackend, AuthSession, TableStore
from .session import SIGNED_IN, SIGNED_OUT, SessionContext

__all__ = [
    "AuthBackend",
    "AuthSession",
    "TableStore",
    "SessionContext",
    "SIGNED_IN",
    "SIGNED_OUT",
]
