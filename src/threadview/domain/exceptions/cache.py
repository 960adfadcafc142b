# Copyright (c) Threadview.
# SPDX-License-Identifier: MIT
"""
Cache Domain Exceptions

Purpose:
    Error conditions raised by cache store adapters. The derived-view cache
    treats these as a soft miss; they never reach its callers.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class CacheUnavailable(DomainError):
    """The backing key-value store is unreachable or timed out."""

    code = "CACHE_UNAVAILABLE"
