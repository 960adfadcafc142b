# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Redis client factory.

Derived views are read inside synchronous request handling, so the store is
backed by the blocking ``redis.Redis`` client. One process-wide client is
created lazily from :class:`Settings`; its connection pool is thread-safe.
"""

from __future__ import annotations

import logging
import os
from contextlib import suppress
from typing import Any, Protocol, cast, runtime_checkable
from urllib.parse import urlparse, urlunparse

import redis

from threadview.config.settings import Settings, get_settings

__all__ = [
    "RedisClient",
    "init_redis",
    "close_redis",
    "get_redis_client",
]


@runtime_checkable
class RedisClient(Protocol):
    """Minimal Redis protocol used by Threadview."""

    def ping(self) -> Any: ...
    def close(self) -> None: ...

    def get(self, key: str) -> Any: ...
    def set(
        self,
        key: str,
        value: Any,
        *,
        ex: int | None = None,
        px: int | None = None,
        nx: bool | None = None,
        xx: bool | None = None,
    ) -> Any: ...
    def ttl(self, key: str) -> Any: ...


_client: RedisClient | None = None
_DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def _maybe_swap_hostname(url: str) -> str:
    """Point the docker-compose hostname ``redis`` at localhost outside CI."""
    try:
        parsed = urlparse(url)
        if parsed.hostname == "redis" and not os.getenv("CI"):
            host = "localhost"
            port = parsed.port or 6379
            if parsed.username and parsed.password:
                netloc = f"{parsed.username}:{parsed.password}@{host}:{port}"
            else:
                netloc = f"{host}:{port}"
            return urlunparse((parsed.scheme, netloc, parsed.path or "/0", "", "", ""))
    except ValueError as exc:
        logging.getLogger(__name__).debug(
            "redis url parse failed; keeping original url: %s", url, exc_info=exc
        )
    return url


def _create_redis_client(url: str, settings: Settings) -> redis.Redis:
    """Build the concrete Redis client from URL."""
    return redis.Redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        health_check_interval=settings.redis_health_check_interval_s,
        socket_timeout=settings.redis_socket_timeout_s,
        socket_connect_timeout=settings.redis_socket_connect_timeout_s,
    )


def init_redis(settings: Settings) -> None:
    """Initialize the global Redis client (idempotent)."""
    global _client
    if _client is not None:
        return

    url = str(settings.redis_url or _DEFAULT_REDIS_URL)
    url = _maybe_swap_hostname(url)

    _client = cast(RedisClient, _create_redis_client(url, settings))


def close_redis() -> None:
    """Close the global Redis client at shutdown."""
    global _client
    if _client is not None:
        with suppress(redis.RedisError):
            _client.close()
        _client = None


def get_redis_client() -> RedisClient:
    """Return the initialized Redis client (lazy-inits from settings)."""
    if _client is None:
        init_redis(get_settings())
    if _client is None:
        raise RuntimeError("Redis client not initialized (init_redis failed)")
    return _client
