# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Dependency wiring for derived thread views.

Overview:
    Builds a :class:`DerivedViewCache` (and its composer) from
    :class:`Settings` plus the host's thread-state provider and renderer.

Layer:
    dependencies

Design:
    * Select the store by configuration:
        - In-memory store for ``CACHE_BACKEND=memory`` and ``ENVIRONMENT=test``
          (hermetic, no Redis dependency).
        - :class:`RedisCacheStore` otherwise, namespaced by ``CACHE_NAMESPACE``.
          The client is created eagerly; an invalid ``REDIS_URL`` raises here.
    * TTL comes from ``DERIVED_VIEW_TTL_S``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from threadview.application.interfaces.cache_port import CacheStore
from threadview.application.interfaces.thread_ports import ThreadRenderer, ThreadStateProvider
from threadview.application.services.composer import DEFAULT_VIEWS, ThreadViewComposer
from threadview.application.services.derived_view_cache import DerivedViewCache
from threadview.config.settings import Settings, get_settings
from threadview.infrastructure.caching.memory_store import InMemoryCacheStore
from threadview.infrastructure.caching.redis_client import get_redis_client, init_redis
from threadview.infrastructure.caching.redis_store import RedisCacheStore

logger = logging.getLogger(__name__)


def build_cache_store(settings: Settings | None = None) -> CacheStore:
    """Return the configured cache store."""
    settings = settings or get_settings()
    if settings.uses_memory_store:
        logger.info("Using in-memory derived-view store", extra={"backend": "memory"})
        return InMemoryCacheStore()

    # Build the client here so a malformed REDIS_URL fails at wiring time
    # instead of on every accessor call.
    init_redis(settings)
    client = get_redis_client()
    logger.info(
        "Using Redis derived-view store",
        extra={"backend": "redis", "namespace": settings.cache_namespace},
    )
    return RedisCacheStore(client, namespace=settings.cache_namespace)


def build_derived_view_cache(
    provider: ThreadStateProvider,
    renderer: ThreadRenderer,
    settings: Settings | None = None,
    *,
    store: CacheStore | None = None,
) -> DerivedViewCache:
    """Wire a derived-view cache from settings.

    Args:
        provider: Thread-state provider of the host platform.
        renderer: Markup renderer.
        settings: Settings override; defaults to :func:`get_settings`.
        store: Store override; defaults to :func:`build_cache_store`.
    """
    settings = settings or get_settings()
    return DerivedViewCache(
        store if store is not None else build_cache_store(settings),
        provider,
        renderer,
        ttl=settings.derived_view_ttl_s,
    )


def build_thread_view_composer(
    provider: ThreadStateProvider,
    renderer: ThreadRenderer,
    settings: Settings | None = None,
    *,
    views: Iterable[str] = DEFAULT_VIEWS,
) -> ThreadViewComposer:
    """Wire a composer over a freshly built derived-view cache."""
    return ThreadViewComposer(build_derived_view_cache(provider, renderer, settings), views)
