# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""
Presenter: HTML Thread Renderer

Purpose:
    Default :class:`ThreadRenderer` producing the markup of the discussion
    section: summary title, ordered response list and "older"/"newer" page
    links. Strings are English only; hosts needing localization supply their
    own renderer.

Layer: adapters/presenters
"""
from __future__ import annotations

from collections.abc import Sequence
from html import escape

from threadview.domain.entities.thread import PostId, ThreadContext, ThreadResponse

OLDER_LABEL = "&larr; Older comments"
NEWER_LABEL = "Newer comments &rarr;"


class HtmlThreadRenderer:
    """Render thread state to HTML fragments.

    Args:
        post_url_template: URL of a post, with a ``{post_id}`` placeholder
            (e.g. ``"https://example.com/posts/{post_id}"``).
    """

    def __init__(self, post_url_template: str) -> None:
        if "{post_id}" not in post_url_template:
            raise ValueError("post_url_template must contain a {post_id} placeholder")
        self._post_url_template = post_url_template

    # ------------------------------------------------------------------ #
    # ThreadRenderer
    # ------------------------------------------------------------------ #
    def title(self, response_count: int, post_title: str) -> str:
        """Return ``"One response to “T”"`` or ``"N responses to “T”"``."""
        quoted = f"&ldquo;{escape(post_title)}&rdquo;"
        if response_count == 1:
            return f"One response to {quoted}"
        return f"{response_count:,} responses to {quoted}"

    def responses(self, ctx: ThreadContext, responses: Sequence[ThreadResponse]) -> str:
        items = "".join(self._render_item(r) for r in responses)
        return f'<ol class="comment-list">{items}</ol>'

    def previous_link(self, ctx: ThreadContext) -> str | None:
        if ctx.current_page <= 1:
            return None
        return self._link(ctx.post_id, ctx.current_page - 1, OLDER_LABEL)

    def next_link(self, ctx: ThreadContext, total_pages: int) -> str | None:
        if ctx.current_page >= total_pages:
            return None
        return self._link(ctx.post_id, ctx.current_page + 1, NEWER_LABEL)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def page_url(self, post_id: PostId, page: int) -> str:
        base = self._post_url_template.format(post_id=post_id).rstrip("/")
        return f"{base}/comment-page-{page}/#comments"

    def _link(self, post_id: PostId, page: int, label: str) -> str:
        href = escape(self.page_url(post_id, page), quote=True)
        return f'<a href="{href}">{label}</a>'

    @staticmethod
    def _render_item(response: ThreadResponse) -> str:
        rid = escape(str(response.response_id), quote=True)
        author = escape(response.author)
        if response.author_url:
            author = f'<a href="{escape(response.author_url, quote=True)}" rel="nofollow">{author}</a>'
        if response.is_ping:
            # Short form: pings show only who linked here.
            return f'<li id="comment-{rid}" class="pingback">Pingback: {author}</li>'

        classes = "comment"
        if response.parent_id is not None:
            classes += " reply"
        return (
            f'<li id="comment-{rid}" class="{classes}">'
            f'<p class="comment-author">{author}</p>'
            f'<div class="comment-content">{escape(response.body)}</div>'
            "</li>"
        )
