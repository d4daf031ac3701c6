"""Server-side sessions stored in redis and addressed by a signed cookie.

The cookie holds only a signed session id; the session payload
(``{"userId": ...}``) lives under ``sess:<id>`` in redis.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from redis import Redis
from redis.exceptions import RedisError
from starlette.responses import Response

from lireddit.core.constants import COOKIE_NAME, SESSION_PREFIX
from lireddit.core.security import new_session_id, sign_session_id, unsign_session_id
from lireddit.core.settings import settings

logger = logging.getLogger(__name__)


class SessionStore:
    """Reads and writes session payloads in redis."""

    def __init__(self, client: Redis, ttl_seconds: int | None = None) -> None:
        self._redis = client
        self.ttl_seconds = ttl_seconds or settings.session_ttl_seconds

    def load(self, session_id: str) -> dict[str, Any] | None:
        raw = self._redis.get(SESSION_PREFIX + session_id)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable session %s", session_id)
            return None
        return data if isinstance(data, dict) else None

    def save(self, session_id: str, data: dict[str, Any]) -> None:
        self._redis.set(SESSION_PREFIX + session_id, json.dumps(data), ex=self.ttl_seconds)

    def destroy(self, session_id: str) -> None:
        self._redis.delete(SESSION_PREFIX + session_id)


class RequestSession:
    """Session state bound to a single request/response pair."""

    def __init__(
        self,
        store: SessionStore,
        response: Response | None,
        session_id: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        self._store = store
        self._response = response
        self.session_id = session_id
        self.data: dict[str, Any] = data or {}

    @classmethod
    def from_cookie(
        cls,
        store: SessionStore,
        cookie_value: str | None,
        response: Response | None,
    ) -> RequestSession:
        """Resume the session named by ``cookie_value``; anonymous if missing or invalid."""
        if not cookie_value:
            return cls(store, response)
        session_id = unsign_session_id(cookie_value)
        if session_id is None:
            return cls(store, response)
        data = store.load(session_id)
        if data is None:
            return cls(store, response)
        return cls(store, response, session_id=session_id, data=data)

    @property
    def user_id(self) -> int | None:
        value = self.data.get("userId")
        return value if isinstance(value, int) else None

    def log_in(self, user_id: int) -> None:
        """Bind the session to ``user_id`` under a fresh id and set the cookie."""
        if self.session_id is not None:
            self._store.destroy(self.session_id)
        self.session_id = new_session_id()
        self.data = {"userId": user_id}
        self._store.save(self.session_id, self.data)
        if self._response is not None:
            self._response.set_cookie(
                COOKIE_NAME,
                sign_session_id(self.session_id),
                max_age=self._store.ttl_seconds,
                httponly=True,
                samesite="lax",
                secure=settings.cookie_secure,
            )
        logger.debug("Session established for user %s", user_id)

    def destroy(self) -> bool:
        """Drop the server-side session and clear the cookie.

        Returns False if the session backend could not delete the session;
        the cookie is cleared either way.
        """
        if self._response is not None:
            self._response.delete_cookie(COOKIE_NAME)
        session_id, self.session_id, self.data = self.session_id, None, {}
        if session_id is None:
            return True
        try:
            self._store.destroy(session_id)
        except RedisError:
            logger.exception("Failed to destroy session %s", session_id)
            return False
        return True
