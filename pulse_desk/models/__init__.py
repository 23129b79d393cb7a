"""Pulse Desk models - re-exports all models and Base.metadata."""

from .base import Base, UUIDMixin, TimestampMixin
from .client import Client
from .activity import Activity
from .auth import AuthAccount, AuthSession

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "Client",
    "Activity",
    "AuthAccount",
    "AuthSession",
]
