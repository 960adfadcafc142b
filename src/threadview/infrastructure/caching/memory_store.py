# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Process-local derived-view store.

Thread-safe dict with per-entry expiry, used in tests and single-process
development where no Redis is available. An entry written at ``t0`` with
TTL ``ttl`` is served strictly before ``t0 + ttl`` and treated as absent
(and evicted) from then on. Expired entries are also swept periodically on
write, so keys that are never read again do not accumulate.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any

__all__ = ["InMemoryCacheStore"]


class InMemoryCacheStore:
    """In-memory implementation of the CacheStore Protocol.

    Args:
        clock: Monotonic time source in seconds; injectable for tests.
        sweep_every: Number of writes between sweeps of expired entries.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = 256,
    ) -> None:
        if sweep_every < 1:
            raise ValueError("sweep_every must be >= 1")
        self._clock = clock
        self._sweep_every = sweep_every
        self._writes = 0
        self._lock = threading.Lock()
        self._store: dict[str, tuple[float, Any]] = {}  # key -> (expires_at, value)

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any, *, ttl: int) -> None:
        if ttl <= 0:
            return
        with self._lock:
            now = self._clock()
            self._writes += 1
            if self._writes >= self._sweep_every:
                # Superseded keys are never read again; drop them here.
                self._writes = 0
                self._purge_expired(now)
            self._store[key] = (now + ttl, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._store.items() if now >= expires_at]
        for k in expired:
            del self._store[k]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
