# tests/unit/application/services/test_stampede.py
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from threadview.application.services.cache_keys import title_key
from threadview.application.services.derived_view_cache import DerivedViewCache
from threadview.domain.entities.thread import ThreadContext


def test_concurrent_misses_both_compute_and_store_a_valid_value(store, thread_state, renderer):
    """Two callers missing the same key both succeed; the store ends up consistent."""
    barrier = threading.Barrier(2, timeout=5)
    original_title = renderer.title

    def gated_title(response_count: int, post_title: str) -> str:
        # Hold both callers inside the computation so neither sees the other's write.
        barrier.wait()
        return original_title(response_count, post_title)

    renderer.title = gated_title  # type: ignore[method-assign]
    cache = DerivedViewCache(store, thread_state, renderer)
    ctx = ThreadContext(post_id=42, response_count=2)

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(lambda _: cache.title(ctx), range(2)))

    expected = "2 responses to &ldquo;Hello World&rdquo;"
    assert results == [expected, expected]
    assert renderer.calls["title"] == 2
    assert store.get(title_key(ctx)) == expected


def test_concurrent_callers_on_distinct_keys_do_not_interact(cache, thread_state):
    thread_state.pages = 10
    contexts = [ThreadContext(post_id=42, response_count=9, current_page=p) for p in range(1, 11)]

    with ThreadPoolExecutor(max_workers=5) as pool:
        links = list(pool.map(cache.previous_link, contexts))

    assert links[0] is None
    for page, link in enumerate(links[1:], start=2):
        assert link is not None
        assert f"comment-page-{page - 1}/" in link
