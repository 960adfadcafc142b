# tests/conftest.py
from __future__ import annotations

from collections import Counter
from collections.abc import Generator, Sequence

import pytest

from threadview.adapters.presenters.html_renderer import HtmlThreadRenderer
from threadview.application.services.derived_view_cache import DerivedViewCache
from threadview.config.settings import get_settings
from threadview.domain.entities.thread import PostId, ThreadContext, ThreadResponse
from threadview.infrastructure.caching.memory_store import InMemoryCacheStore

POST_URL = "https://example.test/posts/{post_id}"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeThreadState:
    """Thread-state provider stub with mutable answers and call recording."""

    def __init__(self) -> None:
        self.title = "Hello World"
        self.items: list[ThreadResponse] = [
            ThreadResponse(response_id=1, author="ada", body="first"),
            ThreadResponse(response_id=2, author="bob", body="second", parent_id=1),
        ]
        self.pages = 1
        self.open = True
        self.supports = True
        self.paginate = True
        self.calls: Counter[str] = Counter()

    def post_title(self, post_id: PostId) -> str:
        self.calls["post_title"] += 1
        return self.title

    def responses(self, post_id: PostId, page: int) -> Sequence[ThreadResponse]:
        self.calls["responses"] += 1
        return list(self.items)

    def total_pages(self, post_id: PostId) -> int:
        self.calls["total_pages"] += 1
        return self.pages

    def is_open(self, post_id: PostId) -> bool:
        self.calls["is_open"] += 1
        return self.open

    def supports_threads(self, post_id: PostId) -> bool:
        self.calls["supports_threads"] += 1
        return self.supports

    def pagination_enabled(self) -> bool:
        self.calls["pagination_enabled"] += 1
        return self.paginate


class CountingRenderer(HtmlThreadRenderer):
    """HtmlThreadRenderer that counts invocations per method."""

    def __init__(self) -> None:
        super().__init__(POST_URL)
        self.calls: Counter[str] = Counter()

    def title(self, response_count: int, post_title: str) -> str:
        self.calls["title"] += 1
        return super().title(response_count, post_title)

    def responses(self, ctx: ThreadContext, responses: Sequence[ThreadResponse]) -> str:
        self.calls["responses"] += 1
        return super().responses(ctx, responses)

    def previous_link(self, ctx: ThreadContext) -> str | None:
        self.calls["previous_link"] += 1
        return super().previous_link(ctx)

    def next_link(self, ctx: ThreadContext, total_pages: int) -> str | None:
        self.calls["next_link"] += 1
        return super().next_link(ctx, total_pages)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Keep env set inside one test from leaking through the Settings singleton."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def thread_state() -> FakeThreadState:
    return FakeThreadState()


@pytest.fixture
def renderer() -> CountingRenderer:
    return CountingRenderer()


@pytest.fixture
def cache(
    store: InMemoryCacheStore,
    thread_state: FakeThreadState,
    renderer: CountingRenderer,
) -> DerivedViewCache:
    return DerivedViewCache(store, thread_state, renderer, ttl=300)
