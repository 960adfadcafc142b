# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Derived-view cache keys.

Every derived view is keyed by a fixed prefix plus exactly the thread fields
its result depends on. Keys are the only invalidation mechanism: when a field
changes, the key changes and the old entry simply ages out. Any new input a
view starts depending on must be added to its builder here.

Layer:
    application/services
"""

from __future__ import annotations

from enum import Enum

from threadview.domain.entities.thread import ThreadContext

__all__ = [
    "DerivedView",
    "make_key",
    "title_key",
    "responses_key",
    "previous_link_key",
    "next_link_key",
    "paginated_key",
    "closed_key",
    "key_for",
]


class DerivedView(str, Enum):
    """Derived views and their key prefixes."""

    TITLE = "title"
    RESPONSES = "responses"
    PREVIOUS_LINK = "prev-link"
    NEXT_LINK = "next-link"
    PAGINATED = "paginated"
    CLOSED = "closed"


def make_key(view: DerivedView, *segments: object) -> str:
    """Join a view prefix and its key segments with ":".

    Args:
        view: Derived view owning the key.
        *segments: Field values; rendered with ``str()``.

    Returns:
        Cache key (not namespaced).
    """
    return ":".join([view.value, *(str(seg) for seg in segments)])


def title_key(ctx: ThreadContext) -> str:
    return make_key(DerivedView.TITLE, ctx.post_id, ctx.response_count)


def responses_key(ctx: ThreadContext) -> str:
    return make_key(DerivedView.RESPONSES, ctx.post_id, ctx.response_count, ctx.current_page)


def previous_link_key(ctx: ThreadContext) -> str:
    return make_key(DerivedView.PREVIOUS_LINK, ctx.post_id, ctx.current_page)


def next_link_key(ctx: ThreadContext) -> str:
    return make_key(DerivedView.NEXT_LINK, ctx.post_id, ctx.current_page)


def paginated_key(ctx: ThreadContext) -> str:
    return make_key(DerivedView.PAGINATED, ctx.post_id)


def closed_key(ctx: ThreadContext) -> str:
    return make_key(DerivedView.CLOSED, ctx.post_id)


_BUILDERS = {
    DerivedView.TITLE: title_key,
    DerivedView.RESPONSES: responses_key,
    DerivedView.PREVIOUS_LINK: previous_link_key,
    DerivedView.NEXT_LINK: next_link_key,
    DerivedView.PAGINATED: paginated_key,
    DerivedView.CLOSED: closed_key,
}


def key_for(view: DerivedView, ctx: ThreadContext) -> str:
    """Return the cache key of ``view`` for ``ctx``."""
    return _BUILDERS[view](ctx)
