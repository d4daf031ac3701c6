"""Registration, login and password-reset flows.

Business-rule failures come back as :class:`UserResult` objects carrying
field errors; only infrastructure failures raise.
"""
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lireddit.core.security import hash_password, verify_password
from lireddit.core.settings import settings
from lireddit.models.user import User
from lireddit.repositories.user_repo import UserRepository
from lireddit.services.mailer import Mailer
from lireddit.services.reset_tokens import ResetTokenStore
from lireddit.services.sessions import RequestSession
from lireddit.services.validation import FieldError, validate_password, validate_register

logger = logging.getLogger(__name__)

__all__ = [
    "UserResult",
    "change_password",
    "current_user",
    "forgot_password",
    "login",
    "logout",
    "register",
]

_EMAIL_COLLISION_MARKERS = ("uq_user_email", "key (email)=", "user.email")


@dataclass
class UserResult:
    """Either a user or the field errors explaining why there is none."""

    errors: list[FieldError] = field(default_factory=list)
    user: User | None = None

    @classmethod
    def error(cls, field_name: str, message: str) -> UserResult:
        return cls(errors=[FieldError(field_name, message)])


def _duplicate_field(err: IntegrityError) -> str | None:
    """Name the column behind a unique violation, or None if it was something else."""
    diag = getattr(err.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint == "uq_user_email":
        return "email"
    if constraint == "uq_user_username":
        return "username"

    detail = str(err.orig).lower()
    if "unique" not in detail and "duplicate" not in detail:
        return None
    if any(marker in detail for marker in _EMAIL_COLLISION_MARKERS):
        return "email"
    return "username"


def current_user(db: Session, session: RequestSession) -> User | None:
    """Return the logged-in user, or None for anonymous sessions."""
    if session.user_id is None:
        return None
    return UserRepository(db).get_by_id(session.user_id)


def register(
    db: Session,
    session: RequestSession,
    *,
    username: str,
    email: str,
    password: str,
) -> UserResult:
    """Create an account and log the caller in as the new user."""
    errors = validate_register(username, email, password)
    if errors:
        return UserResult(errors=errors)

    repo = UserRepository(db)
    try:
        user = repo.create(username=username, email=email, password_hash=hash_password(password))
        db.commit()
    except IntegrityError as err:
        db.rollback()
        field_name = _duplicate_field(err)
        if field_name is None:
            raise
        return UserResult.error(field_name, f"{field_name} already taken")

    session.log_in(user.id)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return UserResult(user=user)


def login(
    db: Session,
    session: RequestSession,
    *,
    username_or_email: str,
    password: str,
) -> UserResult:
    user = UserRepository(db).get_by_username_or_email(username_or_email)
    if user is None:
        return UserResult.error("usernameOrEmail", "user doesn't exist in database")
    if not verify_password(password, user.password):
        return UserResult.error("password", "incorrect password")

    session.log_in(user.id)
    return UserResult(user=user)


def logout(session: RequestSession) -> bool:
    return session.destroy()


def forgot_password(
    db: Session,
    tokens: ResetTokenStore,
    mailer: Mailer,
    *,
    email: str,
) -> bool:
    """Email a reset link if ``email`` belongs to a user.

    Always returns True so callers cannot probe which addresses are registered.
    """
    user = UserRepository(db).get_by_email(email)
    if user is None:
        logger.info("Password reset requested for unknown email")
        return True

    token = tokens.issue(user.id)
    link = f"{settings.frontend_url.rstrip('/')}/change-password/{token}"
    try:
        mailer.send(email, "Reset your password", f'<a href="{link}">reset password</a>')
    except (smtplib.SMTPException, OSError):
        logger.exception("Could not send password reset email to user %s", user.id)
    return True


def change_password(
    db: Session,
    session: RequestSession,
    tokens: ResetTokenStore,
    *,
    token: str,
    new_password: str,
) -> UserResult:
    """Set a new password using a reset token, then log the user in.

    The token is taken atomically before the user is looked up, so it can
    change a password at most once even under concurrent requests.
    """
    errors = validate_password(new_password, field="newPassword")
    if errors:
        return UserResult(errors=errors)

    user_id = tokens.take(token)
    if user_id is None:
        return UserResult.error("token", "token expired")

    repo = UserRepository(db)
    user = repo.get_by_id(user_id)
    if user is None:
        return UserResult.error("token", "user no longer exists")

    repo.set_password(user, hash_password(new_password))
    db.commit()

    session.log_in(user.id)
    return UserResult(user=user)
