"""
Config package export.

Keeps import sites clean and stable:
    from threadview.config import get_settings, Settings
"""

from __future__ import annotations

from .settings import DEFAULT_DERIVED_VIEW_TTL_S, Environment, Settings, get_settings

__all__ = ["DEFAULT_DERIVED_VIEW_TTL_S", "Environment", "Settings", "get_settings"]
