"""Password hashing and session cookie signing."""
from __future__ import annotations

import secrets
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from lireddit.core.settings import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return an argon2 hash of the provided password."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Returns False for malformed or unknown hash formats instead of raising.
    """
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        return False


def new_session_id() -> str:
    """Return a random, URL-safe session identifier."""
    return secrets.token_urlsafe(32)


def new_reset_token() -> str:
    """Return an opaque password-reset token."""
    return str(uuid.uuid4())


def sign_session_id(session_id: str) -> str:
    """Wrap a session id in a signed token suitable for a cookie value."""
    return jwt.encode(
        {"sid": session_id},
        settings.secret_key,
        algorithm=settings.session_algorithm,
    )


def unsign_session_id(cookie_value: str) -> str | None:
    """Return the session id carried by a cookie, or None if it was tampered with."""
    try:
        payload = jwt.decode(
            cookie_value,
            settings.secret_key,
            algorithms=[settings.session_algorithm],
        )
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) and sid else None
