# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""
Service: Derived-View Cache

Purpose:
    Memoize the expensive, request-varying views of a discussion thread
    (title, response list, pagination links, paginated/closed flags) in a
    TTL key-value store.

Design:
    * Six independent read-through accessors sharing one helper.
    * Keys come from :mod:`threadview.application.services.cache_keys`; they
      embed every input a view depends on, so entries are never invalidated
      explicitly and staleness is bounded by the TTL.
    * Link views store :data:`ABSENT_MARKER` when there is no link, so a
      cached "no link" is distinguishable from a missing key.
    * Flags are stored as ``1``/``0``.
    * A store raising :class:`CacheUnavailable` behaves like an empty cache.
      Provider and renderer errors propagate and nothing is stored.
    * No single-flight: concurrent misses on one key each compute the same
      value and the last write wins.

Layer: application/services
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from threadview.application.interfaces.cache_port import CacheStore
from threadview.application.interfaces.thread_ports import ThreadRenderer, ThreadStateProvider
from threadview.application.services.cache_keys import DerivedView, key_for
from threadview.config.settings import DEFAULT_DERIVED_VIEW_TTL_S
from threadview.domain.entities.thread import ThreadContext
from threadview.domain.exceptions.cache import CacheUnavailable
from threadview.infrastructure.logging.logger import get_json_logger
from threadview.infrastructure.observability.metrics import record_view_outcome

__all__ = ["ABSENT_MARKER", "DerivedViewCache"]

logger = get_json_logger(__name__)

T = TypeVar("T")

#: Stored in place of a link that does not exist. Links always start with
#: ``<a `` so no real link can equal it.
ABSENT_MARKER = "__threadview:absent__"


def _encode_optional(value: str | None) -> str:
    if value is None:
        return ABSENT_MARKER
    if value == ABSENT_MARKER:
        raise ValueError("computed value collides with the reserved absence marker")
    return value


def _decode_optional(raw: Any) -> str | None:
    return None if raw == ABSENT_MARKER else str(raw)


def _encode_flag(value: bool) -> int:
    return 1 if value else 0


def _decode_flag(raw: Any) -> bool:
    # Redis hands back "0"/"1" strings, the memory store hands back ints.
    return bool(int(raw))


class DerivedViewCache:
    """Read-through cache for the derived views of a thread.

    Args:
        store: Key-value store with TTL support.
        provider: Thread-state provider queried on a miss.
        renderer: Markup renderer invoked on a miss.
        ttl: Lifetime of every entry in seconds; ``<= 0`` disables storing.
    """

    def __init__(
        self,
        store: CacheStore,
        provider: ThreadStateProvider,
        renderer: ThreadRenderer,
        *,
        ttl: int = DEFAULT_DERIVED_VIEW_TTL_S,
    ) -> None:
        self._store = store
        self._provider = provider
        self._renderer = renderer
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        return self._ttl

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #
    def title(self, ctx: ThreadContext) -> str:
        """Return the summary title, e.g. ``"3 responses to “Post”"``."""

        def compute() -> str:
            post_title = self._provider.post_title(ctx.post_id)
            return self._renderer.title(ctx.response_count, post_title)

        return self._read_through(DerivedView.TITLE, ctx, compute, encode=str, decode=str)

    def responses(self, ctx: ThreadContext) -> str | None:
        """Return the response list markup, or ``None`` for a thread without responses.

        The zero-response check happens before any store access.
        """
        if not ctx.has_responses:
            record_view_outcome(DerivedView.RESPONSES.value, "absent")
            return None

        def compute() -> str:
            items = self._provider.responses(ctx.post_id, ctx.current_page)
            return self._renderer.responses(ctx, items)

        return self._read_through(DerivedView.RESPONSES, ctx, compute, encode=str, decode=str)

    def previous_link(self, ctx: ThreadContext) -> str | None:
        """Return the "older" link, or ``None`` on the first page."""
        return self._read_through(
            DerivedView.PREVIOUS_LINK,
            ctx,
            lambda: self._renderer.previous_link(ctx),
            encode=_encode_optional,
            decode=_decode_optional,
        )

    def next_link(self, ctx: ThreadContext) -> str | None:
        """Return the "newer" link, or ``None`` on the last page."""

        def compute() -> str | None:
            total_pages = self._provider.total_pages(ctx.post_id)
            return self._renderer.next_link(ctx, total_pages)

        return self._read_through(
            DerivedView.NEXT_LINK,
            ctx,
            compute,
            encode=_encode_optional,
            decode=_decode_optional,
        )

    def paginated(self, ctx: ThreadContext) -> bool:
        """Return True when the thread spans several pages and the site paginates."""

        def compute() -> bool:
            return self._provider.total_pages(ctx.post_id) > 1 and bool(
                self._provider.pagination_enabled()
            )

        return self._read_through(
            DerivedView.PAGINATED, ctx, compute, encode=_encode_flag, decode=_decode_flag
        )

    def closed(self, ctx: ThreadContext) -> bool:
        """Return True when the thread is closed, has responses and its type supports threads.

        A closed thread with zero responses reports ``False``.
        """

        def compute() -> bool:
            return (
                not self._provider.is_open(ctx.post_id)
                and ctx.response_count != 0
                and bool(self._provider.supports_threads(ctx.post_id))
            )

        return self._read_through(
            DerivedView.CLOSED, ctx, compute, encode=_encode_flag, decode=_decode_flag
        )

    # ------------------------------------------------------------------ #
    # Read-through plumbing
    # ------------------------------------------------------------------ #
    def _read_through(
        self,
        view: DerivedView,
        ctx: ThreadContext,
        compute: Callable[[], T],
        *,
        encode: Callable[[T], Any],
        decode: Callable[[Any], T],
    ) -> T:
        key = key_for(view, ctx)

        cached = self._get(view, key)
        if cached is not None:
            record_view_outcome(view.value, "hit")
            return decode(cached)

        record_view_outcome(view.value, "miss")
        logger.debug("derived view miss", extra={"view": view.value, "key": key})

        value = compute()
        self._set(view, key, encode(value))
        return value

    def _get(self, view: DerivedView, key: str) -> Any | None:
        try:
            return self._store.get(key)
        except CacheUnavailable as exc:
            record_view_outcome(view.value, "unavailable")
            logger.warning(
                "cache store unavailable on read; recomputing",
                extra={"view": view.value, "key": key, "error": str(exc)},
            )
            return None

    def _set(self, view: DerivedView, key: str, encoded: Any) -> None:
        if self._ttl <= 0:
            return
        try:
            self._store.set(key, encoded, ttl=self._ttl)
        except CacheUnavailable as exc:
            record_view_outcome(view.value, "unavailable")
            logger.warning(
                "cache store unavailable on write; value not cached",
                extra={"view": view.value, "key": key, "error": str(exc)},
            )
