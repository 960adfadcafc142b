# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""Prometheus metrics utilities (registry-aware, hot-reload safe).

Accessor functions return a *singleton* collector bound to the **current**
``prometheus_client.REGISTRY``:

- Safe under hot reload and tests that swap the default registry.
- No duplicate-registration errors.
- Cache automatically resets when the active registry changes.

Labelled metrics are created exactly once per registry. Callers should
immediately ``.labels(...).observe/inc`` as usual.

Example:
    get_derived_view_requests_total().labels(view="title", outcome="hit").inc()
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final

import prometheus_client as prom
from prometheus_client import Counter, Histogram

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Cache operations are sub-millisecond on a healthy store; keep low buckets.
_BUCKETS: Final[tuple[float, ...]] = (
    0.0005,
    0.001,
    0.0025,
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    1.000,
)

# Cache keyed by metric name within the currently-active registry.
_registry_id: int | None = None
_hist_cache: dict[str, Histogram] = {}
_counter_cache: dict[str, Counter] = {}
_lock = threading.RLock()


# ---------------------------------------------------------------------------
# Registry-handling primitives


def _active_registry_id() -> int:
    return id(prom.REGISTRY)


def _ensure_registry() -> None:
    """Reset caches if the active registry changed.

    This must be called before any metric lookup/creation to avoid mixing
    collectors across registries (common in tests).
    """
    global _registry_id
    with _lock:
        rid = _active_registry_id()
        if _registry_id is None or _registry_id != rid:
            _hist_cache.clear()
            _counter_cache.clear()
            _registry_id = rid


def _lookup_existing(name: str, kind: type) -> object | None:
    """Return a previously-registered collector of ``kind`` from the active registry."""
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            col = mapping.get(name)
            if isinstance(col, kind):
                return col
    return None


# ---------------------------------------------------------------------------
# Get-or-create helpers


def _get_or_create_hist(
    name: str,
    help_text: str,
    *,
    buckets: tuple[float, ...] = _BUCKETS,
    labelnames: tuple[str, ...] = (),
) -> Histogram:
    """Get or create a registry-bound ``Histogram`` with stable identity.

    1. Return from module cache if present for the active registry.
    2. If registry already has a collector by this name, reuse it.
    3. Otherwise, register a new collector on the active registry.
    4. If concurrent registration triggers a duplication error, retry step 2.
    """
    _ensure_registry()
    with _lock:
        cached = _hist_cache.get(name)
        if cached is not None:
            return cached

        existing = _lookup_existing(name, Histogram)
        if isinstance(existing, Histogram):
            _hist_cache[name] = existing
            return existing

        try:
            h = Histogram(name, help_text, labelnames, buckets=buckets, registry=prom.REGISTRY)
            _hist_cache[name] = h
            return h
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing(name, Histogram)
                if isinstance(again, Histogram):
                    _hist_cache[name] = again
                    return again
            _log.exception("Failed to register Prometheus histogram %s", name)
            raise


def _get_or_create_counter(
    name: str,
    help_text: str,
    *,
    labelnames: tuple[str, ...] = (),
) -> Counter:
    """Get or create a registry-bound ``Counter`` with stable identity."""
    _ensure_registry()
    with _lock:
        cached = _counter_cache.get(name)
        if cached is not None:
            return cached

        # prometheus_client registers counters under their ``_total``-less name.
        existing = _lookup_existing(name.removesuffix("_total"), Counter) or _lookup_existing(
            name, Counter
        )
        if isinstance(existing, Counter):
            _counter_cache[name] = existing
            return existing

        try:
            c = Counter(name, help_text, labelnames, registry=prom.REGISTRY)
            _counter_cache[name] = c
            return c
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing(name.removesuffix("_total"), Counter)
                if isinstance(again, Counter):
                    _counter_cache[name] = again
                    return again
            _log.exception("Failed to register Prometheus counter %s", name)
            raise


# ---------------------------------------------------------------------------
# Derived-view cache metrics


def get_derived_view_requests_total() -> Counter:
    """Return counter for derived-view lookups.

    Labels:
        view: Derived view prefix (e.g. ``title``, ``prev-link``).
        outcome: One of ``hit|miss|absent|unavailable``.

    Returns:
        Counter: Labelled collector.
    """
    return _get_or_create_counter(
        name="threadview_derived_view_requests_total",
        help_text="Derived-view lookups by view and outcome",
        labelnames=("view", "outcome"),
    )


def get_cache_operation_duration_seconds() -> Histogram:
    """Return histogram for cache store operation latency.

    Labels:
        operation: ``get`` or ``set``.
        namespace: Store key namespace.
        hit: ``true|false`` for reads, ``n/a`` for writes, ``error`` on failure.

    Returns:
        Histogram: Labelled collector.
    """
    return _get_or_create_hist(
        name="threadview_cache_operation_duration_seconds",
        help_text="Latency (seconds) of derived-view cache store operations",
        labelnames=("operation", "namespace", "hit"),
    )


def record_view_outcome(view: str, outcome: str) -> None:
    """Increment the derived-view counter; never raises."""
    with suppress(Exception):
        get_derived_view_requests_total().labels(view=view, outcome=outcome).inc()
