"""Shared Redis client factory for the token blocklist."""

import redis
from django.conf import settings

_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return a lazily created singleton Redis client using REDIS_URL.

    Socket timeouts keep a dead Redis from hanging request threads; callers
    translate connection errors into ``BlocklistUnavailable``.
    """

    global _client
    if _client is None:
        _client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
    return _client


def reset_redis_client() -> None:
    """Drop the cached client so the next call reconnects with current settings."""

    global _client
    _client = None


__all__ = ["get_redis_client", "reset_redis_client"]
