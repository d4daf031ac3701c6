"""Input checks that report problems as field errors instead of raising."""
from __future__ import annotations

from dataclasses import dataclass

from lireddit.core.constants import PASSWORD_MIN_LENGTH, USERNAME_MIN_LENGTH


@dataclass(frozen=True)
class FieldError:
    """A validation failure attached to one input field."""

    field: str
    message: str


def validate_password(password: str, *, field: str = "password") -> list[FieldError]:
    if len(password) < PASSWORD_MIN_LENGTH:
        return [FieldError(field, f"length must be greater than {PASSWORD_MIN_LENGTH - 1}")]
    return []


def validate_register(username: str, email: str, password: str) -> list[FieldError]:
    """Return every problem with a registration form, in field order.

    An empty list means the input may be inserted.
    """
    errors: list[FieldError] = []

    if len(username) < USERNAME_MIN_LENGTH:
        errors.append(
            FieldError("username", f"length must be greater than {USERNAME_MIN_LENGTH - 1}")
        )
    elif "@" in username:
        # Login treats anything with an "@" as an email address.
        errors.append(FieldError("username", "cannot include an @"))

    if "@" not in email:
        errors.append(FieldError("email", "invalid email"))

    errors.extend(validate_password(password))
    return errors
