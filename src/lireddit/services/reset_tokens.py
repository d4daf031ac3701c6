"""Single-use password-reset tokens kept in redis with a TTL."""

from __future__ import annotations

from redis import Redis

from lireddit.core.constants import FORGET_PASSWORD_PREFIX
from lireddit.core.security import new_reset_token
from lireddit.core.settings import settings


class ResetTokenStore:
    """Maps opaque tokens to user ids until they expire or are taken."""

    def __init__(self, client: Redis, ttl_seconds: int | None = None) -> None:
        self._redis = client
        self.ttl_seconds = ttl_seconds or settings.reset_token_ttl_seconds

    def issue(self, user_id: int) -> str:
        """Create a token for ``user_id`` and return it."""
        token = new_reset_token()
        self._redis.set(FORGET_PASSWORD_PREFIX + token, str(user_id), ex=self.ttl_seconds)
        return token

    def take(self, token: str) -> int | None:
        """Return the user id for ``token`` and delete it in one step (redis ``GETDEL``).

        Of two requests presenting the same token, at most one gets a user id.
        """
        raw = self._redis.getdel(FORGET_PASSWORD_PREFIX + token)
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            return None
