# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Thread State and Rendering Protocols.

Synopsis:
    PEP 544 protocols for the two collaborators the derived-view cache calls
    on a miss: the thread-state provider (queries the content platform) and
    the renderer (formats markup). Concrete implementations live in adapters
    or in the host platform integration.

Design:
    * Each provider method answers one question, so a miss only pays for the
      query its view depends on.
    * Renderers receive already-fetched state and perform no queries.
    * Errors raised by implementations propagate unchanged to the caller of
      the derived-view cache.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from threadview.domain.entities.thread import PostId, ThreadContext, ThreadResponse


class ThreadStateProvider(Protocol):
    """Read-only access to thread state held by the content platform."""

    def post_title(self, post_id: PostId) -> str:
        """Return the display title of the post."""
        ...

    def responses(self, post_id: PostId, page: int) -> Sequence[ThreadResponse]:
        """Return the ordered responses shown on ``page`` (1-based)."""
        ...

    def total_pages(self, post_id: PostId) -> int:
        """Return the number of response pages for the post (at least 1)."""
        ...

    def is_open(self, post_id: PostId) -> bool:
        """Return True when the thread still accepts responses."""
        ...

    def supports_threads(self, post_id: PostId) -> bool:
        """Return True when the post's content type supports threads."""
        ...

    def pagination_enabled(self) -> bool:
        """Return the site-level "paginate responses" setting."""
        ...


class ThreadRenderer(Protocol):
    """Formats thread state into markup strings."""

    def title(self, response_count: int, post_title: str) -> str:
        """Return the pluralization-aware summary title."""
        ...

    def responses(self, ctx: ThreadContext, responses: Sequence[ThreadResponse]) -> str:
        """Return the ordered-list markup for the current page."""
        ...

    def previous_link(self, ctx: ThreadContext) -> str | None:
        """Return the link to the prior page, or ``None`` on the first page."""
        ...

    def next_link(self, ctx: ThreadContext, total_pages: int) -> str | None:
        """Return the link to the next page, or ``None`` on the last page."""
        ...
