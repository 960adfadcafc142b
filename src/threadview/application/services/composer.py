# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""
Service: Thread View Composer

Purpose:
    Gather every derived view of a thread into one bundle for the template
    that renders the discussion section of a post.

Layer: application/services
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from threadview.application.services.derived_view_cache import DerivedViewCache
from threadview.domain.entities.thread import ThreadContext, ThreadView

DEFAULT_VIEWS: tuple[str, ...] = ("partials.comments",)


class ThreadViewComposer:
    """Expose the cached derived views to the templates it serves.

    Args:
        cache: Derived-view cache used for every value.
        views: Template names this composer provides data for.
    """

    def __init__(self, cache: DerivedViewCache, views: Iterable[str] = DEFAULT_VIEWS) -> None:
        self._cache = cache
        self.views: tuple[str, ...] = tuple(views)

    def handles(self, view_name: str) -> bool:
        return view_name in self.views

    def compose(self, ctx: ThreadContext) -> ThreadView:
        cache = self._cache
        return ThreadView(
            title=cache.title(ctx),
            responses=cache.responses(ctx),
            previous=cache.previous_link(ctx),
            next=cache.next_link(ctx),
            paginated=cache.paginated(ctx),
            closed=cache.closed(ctx),
        )

    def with_data(self, ctx: ThreadContext) -> dict[str, Any]:
        """Return the composed view as a template data mapping."""
        return self.compose(ctx).as_dict()
