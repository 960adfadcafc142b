# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Threadview Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration for the derived-view cache. This module
    centralizes environment parsing and validation. Only the dependency
    wiring layer should read it at runtime; services receive plain values
    (store, TTL) through their constructors.

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'` to catch unknown env.
    - Explicit field declarations with constrained types and ranges.
    - Environment enumeration for behavior toggles (includes TEST).
    - Singleton accessor `get_settings()` with LRU cache.
    - Safe, structured logging (no secrets).
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

#: Default lifetime of a derived-view cache entry (seconds).
DEFAULT_DERIVED_VIEW_TTL_S = 300


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed configuration for Threadview."""

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    # ---------------------------
    # Cache store
    # ---------------------------
    cache_backend: Literal["redis", "memory"] = Field(
        default="redis",
        description="Backing store for derived views ('redis' or process-local 'memory').",
        validation_alias="CACHE_BACKEND",
    )
    cache_namespace: str = Field(
        default="threadview:comments:v1",
        min_length=1,
        description="Prefix applied to every key written by the Redis store.",
        validation_alias="CACHE_NAMESPACE",
    )
    derived_view_ttl_s: int = Field(
        default=DEFAULT_DERIVED_VIEW_TTL_S,
        ge=0,
        le=24 * 60 * 60,
        description="TTL applied to every derived-view entry. 0 disables caching.",
        validation_alias="DERIVED_VIEW_TTL_S",
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL used for the derived-view cache.",
        validation_alias="REDIS_URL",
    )
    redis_health_check_interval_s: int = Field(
        default=15,
        ge=1,
        le=3600,
        description="Health check interval for Redis clients in seconds.",
        validation_alias="REDIS_HEALTH_CHECK_INTERVAL_S",
    )
    redis_socket_timeout_s: float = Field(
        default=3.0,
        ge=0.1,
        le=60.0,
        description="Socket timeout in seconds for Redis commands.",
        validation_alias="REDIS_SOCKET_TIMEOUT_S",
    )
    redis_socket_connect_timeout_s: float = Field(
        default=3.0,
        ge=0.1,
        le=60.0,
        description="Socket connect timeout in seconds for Redis.",
        validation_alias="REDIS_SOCKET_CONNECT_TIMEOUT_S",
    )

    # ---------------------------
    # Logging
    # ---------------------------
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO'). If not set, defaults are used.",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
        case_sensitive=False,
    )

    @property
    def uses_memory_store(self) -> bool:
        """Return True when derived views should live in process memory."""
        return self.cache_backend == "memory" or self.environment is Environment.TEST


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated application settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
        logger.info(
            "Settings initialized",
            extra={
                "environment": settings.environment.value,
                "cache_backend": settings.cache_backend,
                "cache_namespace": settings.cache_namespace,
                "derived_view_ttl_s": settings.derived_view_ttl_s,
                "redis_url_set": bool(settings.redis_url),
                "redis_health_check_interval_s": settings.redis_health_check_interval_s,
                "redis_socket_timeout_s": settings.redis_socket_timeout_s,
                "redis_socket_connect_timeout_s": settings.redis_socket_connect_timeout_s,
            },
        )
        return settings
    except ValidationError as exc:
        logger.exception("Invalid application configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
