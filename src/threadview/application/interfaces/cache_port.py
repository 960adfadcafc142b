# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Application Interface: Cache Store Port.

Synopsis:
    Minimal scalar key-value behavior used by the derived-view cache. Enables
    swapping Redis, in-memory, or other store implementations.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Any, Protocol


class CacheStore(Protocol):
    """Key-value store with per-entry TTL semantics.

    Values are opaque scalars (``str`` or small ``int``). A store cannot tell
    a stored empty value from a missing key, so callers must never store
    ``None``. Implementations may treat a TTL ``<= 0`` as "do not cache".

    Implementations raise
    :class:`threadview.domain.exceptions.cache.CacheUnavailable` when the
    backend cannot be reached.
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value for ``key``, or ``None`` if absent or expired.

        Args:
            key: Cache key.

        Raises:
            CacheUnavailable: Backend unreachable.
        """

    def set(self, key: str, value: Any, *, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds.

        Args:
            key: Cache key.
            value: Scalar value (``str`` or ``int``).
            ttl: Time-to-live in seconds.

        Raises:
            CacheUnavailable: Backend unreachable.
        """
