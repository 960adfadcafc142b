# tests/unit/dependencies/test_views_wiring.py
from __future__ import annotations

import fakeredis
import pytest

from threadview.application.services.composer import ThreadViewComposer
from threadview.config.settings import Settings
from threadview.dependencies.views import (
    build_cache_store,
    build_derived_view_cache,
    build_thread_view_composer,
)
from threadview.domain.entities.thread import ThreadContext
from threadview.infrastructure.caching import redis_client as redis_client_module
from threadview.infrastructure.caching.memory_store import InMemoryCacheStore
from threadview.infrastructure.caching.redis_store import RedisCacheStore


def _settings(**env: str) -> Settings:
    return Settings.model_validate(env)


@pytest.mark.parametrize(
    "env",
    [
        {"CACHE_BACKEND": "memory"},
        {"ENVIRONMENT": "test", "CACHE_BACKEND": "redis"},
    ],
)
def test_memory_store_selected(env) -> None:
    assert isinstance(build_cache_store(_settings(**env)), InMemoryCacheStore)


def test_redis_store_selected_with_namespace(monkeypatch) -> None:
    monkeypatch.setattr(redis_client_module, "_client", None)
    store = build_cache_store(
        _settings(ENVIRONMENT="production", CACHE_BACKEND="redis", CACHE_NAMESPACE="blog:v2")
    )
    assert isinstance(store, RedisCacheStore)
    assert store.namespace == "blog:v2"


def test_malformed_redis_url_fails_at_wiring_time(monkeypatch) -> None:
    """A REDIS_URL without a scheme raises when the store is built."""
    monkeypatch.setattr(redis_client_module, "_client", None)
    with pytest.raises(ValueError):
        build_cache_store(
            _settings(ENVIRONMENT="production", CACHE_BACKEND="redis", REDIS_URL="localhost:6379")
        )
    assert redis_client_module._client is None


def test_cache_uses_configured_ttl(thread_state, renderer) -> None:
    cache = build_derived_view_cache(
        thread_state, renderer, _settings(CACHE_BACKEND="memory", DERIVED_VIEW_TTL_S="45")
    )
    assert cache.ttl == 45


def test_explicit_store_overrides_settings(thread_state, renderer, store) -> None:
    cache = build_derived_view_cache(
        thread_state, renderer, _settings(CACHE_BACKEND="redis"), store=store
    )
    ctx = ThreadContext(post_id=1, response_count=2)
    cache.title(ctx)
    assert len(store) == 1


def test_composer_over_redis_end_to_end(monkeypatch, thread_state, renderer) -> None:
    fake = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr(redis_client_module, "_client", fake)

    composer = build_thread_view_composer(
        thread_state,
        renderer,
        _settings(ENVIRONMENT="staging", CACHE_NAMESPACE="e2e:v1"),
    )
    assert isinstance(composer, ThreadViewComposer)

    data = composer.with_data(ThreadContext(post_id=5, response_count=1))
    assert data["title"] == "One response to &ldquo;Hello World&rdquo;"
    assert fake.get("e2e:v1:title:5:1") == data["title"]
    assert fake.ttl("e2e:v1:title:5:1") <= 300
