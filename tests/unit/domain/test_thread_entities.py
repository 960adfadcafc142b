# tests/unit/domain/test_thread_entities.py
from __future__ import annotations

import dataclasses

import pytest

from threadview.domain.entities.thread import ThreadContext, ThreadView
from threadview.domain.exceptions.base import DomainError
from threadview.domain.exceptions.cache import CacheUnavailable


def test_context_defaults_to_first_page() -> None:
    ctx = ThreadContext(post_id=1, response_count=0)
    assert ctx.current_page == 1
    assert ctx.has_responses is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"post_id": 1, "response_count": -1},
        {"post_id": 1, "response_count": 0, "current_page": 0},
        {"post_id": "", "response_count": 0},
    ],
)
def test_context_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        ThreadContext(**kwargs)


@pytest.mark.parametrize(("page", "expected"), [(None, 1), (0, 1), ("", 1), ("3", 3), (2, 2)])
def test_from_request_normalizes_page(page, expected) -> None:
    ctx = ThreadContext.from_request(post_id=9, response_count="4", page=page)
    assert ctx.current_page == expected
    assert ctx.response_count == 4


def test_context_is_immutable_and_hashable() -> None:
    ctx = ThreadContext(post_id=1, response_count=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.response_count = 3  # type: ignore[misc]
    assert ctx == ThreadContext(post_id=1, response_count=2, current_page=1)
    assert len({ctx, ThreadContext(post_id=1, response_count=2)}) == 1


def test_thread_view_as_dict() -> None:
    view = ThreadView(
        title="t", responses=None, previous=None, next="n", paginated=True, closed=False
    )
    assert view.as_dict() == {
        "title": "t",
        "responses": None,
        "previous": None,
        "next": "n",
        "paginated": True,
        "closed": False,
    }


def test_cache_unavailable_is_a_domain_error() -> None:
    err = CacheUnavailable("down", details={"key": "k"})
    assert isinstance(err, DomainError)
    assert err.code == "CACHE_UNAVAILABLE"
    assert err.details == {"key": "k"}
    assert str(err) == "down"
