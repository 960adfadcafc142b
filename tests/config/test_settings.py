from __future__ import annotations

import pytest
from pydantic import ValidationError

from threadview.config.settings import Environment, Settings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ENVIRONMENT", "CACHE_BACKEND", "DERIVED_VIEW_TTL_S", "CACHE_NAMESPACE"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.environment == Environment.DEVELOPMENT
    assert s.derived_view_ttl_s == 300
    assert s.cache_backend == "redis"
    assert s.cache_namespace == "threadview:comments:v1"
    assert s.uses_memory_store is False


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings should hydrate deterministically from environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DERIVED_VIEW_TTL_S", "60")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/2")
    monkeypatch.setenv("CACHE_NAMESPACE", "site-a:comments:v1")

    s = Settings(_env_file=None)

    assert s.environment == Environment.TEST
    assert s.derived_view_ttl_s == 60
    assert s.redis_url == "redis://cache:6379/2"
    assert s.cache_namespace == "site-a:comments:v1"
    assert s.uses_memory_store is True


def test_settings_forbid_extra_fields() -> None:
    """Model should reject unexpected fields."""
    with pytest.raises((ValidationError, TypeError)):
        Settings.model_validate(
            {
                "environment": "test",
                "unexpected_field": "boom",
            }
        )


@pytest.mark.parametrize("ttl", ["-1", "86401"])
def test_settings_reject_out_of_range_ttl(monkeypatch: pytest.MonkeyPatch, ttl: str) -> None:
    monkeypatch.setenv("DERIVED_VIEW_TTL_S", ttl)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_BACKEND", "memcached")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_BACKEND", "memory")
    assert get_settings() is get_settings()
    assert get_settings().uses_memory_store is True
