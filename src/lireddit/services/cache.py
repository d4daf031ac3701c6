"""Shared redis client."""

from __future__ import annotations

from functools import lru_cache

from redis import Redis

from lireddit.core.settings import settings


@lru_cache(maxsize=1)
def get_redis() -> Redis:
    """Return the process-wide redis client; its connection pool is shared across requests."""
    return Redis.from_url(settings.redis_url, decode_responses=True)
