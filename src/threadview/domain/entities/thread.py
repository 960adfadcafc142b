# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""
Thread Entities

Purpose:
    Immutable request-scoped view of a discussion thread (no I/O), plus the
    response and bundled-view value types exchanged with renderers and
    templates.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import BaseEntity

PostId = int | str


@dataclass(frozen=True, slots=True)
class ThreadContext(BaseEntity):
    """Per-request thread state used to key derived views.

    Args:
        post_id: Identifier of the post owning the thread.
        response_count: Number of responses currently on the thread (non-negative).
        current_page: 1-based page within the paginated response list.

    Raises:
        ValueError: If invariants are violated (negative count, page below 1).
    """

    post_id: PostId
    response_count: int
    current_page: int = 1

    def __post_init__(self) -> None:
        if self.post_id is None or str(self.post_id) == "":
            raise ValueError("post_id must be non-empty")
        if self.response_count < 0:
            raise ValueError("response_count must be >= 0")
        if self.current_page < 1:
            raise ValueError("current_page must be >= 1")

    @classmethod
    def from_request(
        cls,
        post_id: PostId,
        response_count: int,
        page: Any = None,
    ) -> ThreadContext:
        """Build a context from raw request values.

        A missing or falsy page (``None``, ``0``, ``""``) means the first page.
        """
        return cls(
            post_id=post_id,
            response_count=int(response_count),
            current_page=int(page) if page else 1,
        )

    @property
    def has_responses(self) -> bool:
        return self.response_count > 0


@dataclass(frozen=True, slots=True)
class ThreadResponse(BaseEntity):
    """A single response on a thread.

    Args:
        response_id: Provider identifier of the response.
        author: Display name of the author.
        body: Plain-text body (renderers escape it).
        parent_id: Identifier of the response this one replies to, if any.
        is_ping: True for pingbacks/trackbacks, rendered in short form.
        author_url: Optional link to the author (the linking site for pings).
    """

    response_id: PostId
    author: str
    body: str
    parent_id: PostId | None = None
    is_ping: bool = False
    author_url: str | None = None


@dataclass(frozen=True, slots=True)
class ThreadView(BaseEntity):
    """All derived views of a thread for one request."""

    title: str
    responses: str | None
    previous: str | None
    next: str | None
    paginated: bool
    closed: bool

    def as_dict(self) -> dict[str, Any]:
        """Return the view as template data."""
        return {
            "title": self.title,
            "responses": self.responses,
            "previous": self.previous,
            "next": self.next,
            "paginated": self.paginated,
            "closed": self.closed,
        }
