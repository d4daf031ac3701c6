"""Fixed names shared between the session layer and the password-reset flow."""

from typing import Final

COOKIE_NAME: Final[str] = "qid"
SESSION_PREFIX: Final[str] = "sess:"
FORGET_PASSWORD_PREFIX: Final[str] = "forget-password:"

USERNAME_MIN_LENGTH: Final[int] = 3
PASSWORD_MIN_LENGTH: Final[int] = 6
TEXT_SNIPPET_LENGTH: Final[int] = 50
