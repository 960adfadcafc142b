# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Derived-view store (Redis-backed).

Synopsis:
    Thin adapter implementing the :class:`CacheStore` Protocol on top of the
    shared Redis client provided by
    :mod:`threadview.infrastructure.caching.redis_client`.

Design:
    * Namespaced keys: ``{namespace}:{key}``, e.g.
      ``threadview:comments:v1:title:42:3``.
    * Scalar values only; Redis returns them as ``str``
      (``decode_responses=True``).
    * TTL applied with ``SET ... EX``; ``ttl <= 0`` skips the write.
    * Every :class:`redis.RedisError` is translated into
      :class:`CacheUnavailable` so callers can fall back to recomputation.

Layer:
    infrastructure/caching
"""

from __future__ import annotations

import time
from contextlib import suppress
from typing import Any

import redis

from threadview.domain.exceptions.cache import CacheUnavailable
from threadview.infrastructure.caching.redis_client import RedisClient, get_redis_client
from threadview.infrastructure.observability.metrics import get_cache_operation_duration_seconds

__all__ = ["RedisCacheStore"]


class RedisCacheStore:
    """Redis-backed implementation of the CacheStore Protocol.

    Args:
        client: Redis client; defaults to the shared process-wide client.
        namespace: Prefix applied to all keys to avoid collisions.
    """

    def __init__(
        self,
        client: RedisClient | None = None,
        *,
        namespace: str = "threadview:comments:v1",
    ) -> None:
        self._client = client
        self._ns = namespace

    @property
    def namespace(self) -> str:
        return self._ns

    def _k(self, key: str) -> str:
        """Build a namespaced key."""
        return f"{self._ns}:{key.lstrip(':')}"

    def _redis(self) -> RedisClient:
        return self._client if self._client is not None else get_redis_client()

    def get(self, key: str) -> Any | None:
        """Return the stored scalar for ``key`` or ``None``.

        Raises:
            CacheUnavailable: Redis could not be reached.
        """
        start = time.perf_counter()
        hit_label = "false"
        try:
            raw = self._redis().get(self._k(key))
            if raw is None:
                return None
            hit_label = "true"
            # Clients built without decode_responses hand back bytes.
            return raw.decode("utf-8") if isinstance(raw, bytes) else raw
        except redis.RedisError as exc:
            hit_label = "error"
            raise CacheUnavailable(
                "redis get failed", details={"key": key, "namespace": self._ns}
            ) from exc
        finally:
            self._observe("get", hit_label, time.perf_counter() - start)

    def set(self, key: str, value: Any, *, ttl: int) -> None:
        """Store ``value`` under ``key`` with ``ttl`` seconds.

        Raises:
            CacheUnavailable: Redis could not be reached.
        """
        if ttl <= 0:
            return

        start = time.perf_counter()
        hit_label = "n/a"
        try:
            self._redis().set(self._k(key), value, ex=ttl)
        except redis.RedisError as exc:
            hit_label = "error"
            raise CacheUnavailable(
                "redis set failed", details={"key": key, "namespace": self._ns}
            ) from exc
        finally:
            self._observe("set", hit_label, time.perf_counter() - start)

    def _observe(self, operation: str, hit: str, duration: float) -> None:
        with suppress(Exception):
            get_cache_operation_duration_seconds().labels(
                operation=operation,
                namespace=self._ns,
                hit=hit,
            ).observe(duration)
