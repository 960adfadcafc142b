"""Threadview: memoized derived views of paginated discussion threads."""

from __future__ import annotations

from threadview.application.services.composer import ThreadViewComposer
from threadview.application.services.derived_view_cache import ABSENT_MARKER, DerivedViewCache
from threadview.domain.entities.thread import ThreadContext, ThreadResponse, ThreadView

__all__ = [
    "ABSENT_MARKER",
    "DerivedViewCache",
    "ThreadContext",
    "ThreadResponse",
    "ThreadView",
    "ThreadViewComposer",
]
