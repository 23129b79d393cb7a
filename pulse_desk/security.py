"""Password hashing, session ids and redirect sanitising."""

from __future__ import annotations

import binascii
import hashlib
import hmac
import secrets
from urllib.parse import urlsplit


def hash_password(password: str, iterations: int = 200_000) -> str:
    """Hash a password using PBKDF2-SHA256."""
    if not password:
        raise ValueError("Password is required")
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return (
        f"pbkdf2_sha256${iterations}$"
        f"{binascii.hexlify(salt).decode('ascii')}$"
        f"{binascii.hexlify(digest).decode('ascii')}"
    )


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a PBKDF2-SHA256 password hash."""
    if not password or not stored_hash:
        return False
    try:
        scheme, iterations_raw, salt_hex, digest_hex = stored_hash.split("$", 3)
        if scheme != "pbkdf2_sha256":
            return False
        iterations = int(iterations_raw)
        salt = binascii.unhexlify(salt_hex.encode("ascii"))
        expected = binascii.unhexlify(digest_hex.encode("ascii"))
    except (ValueError, binascii.Error):
        return False

    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(actual, expected)


def issue_session_id() -> str:
    return secrets.token_urlsafe(32)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def sanitize_next_path(raw_next: str | None, home_path: str = "/") -> str:
    """Allow only local relative redirect targets to avoid open redirects."""
    next_path = (raw_next or "").strip()
    if not next_path:
        return home_path
    if "\\" in next_path:
        return home_path
    parsed = urlsplit(next_path)
    if parsed.scheme or parsed.netloc:
        return home_path
    if not next_path.startswith("/") or next_path.startswith("//"):
        return home_path
    return next_path
