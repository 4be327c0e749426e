"""Configuration package for site-surfer.

Re-exports the most commonly used configuration symbols so that callers can
write::

    from site_surfer.config import get_settings, resolve_browser
"""

from __future__ import annotations

from site_surfer.config.browsers import (
    DEFAULT_BROWSER_PATHS,
    browser_table,
    resolve_browser,
)
from site_surfer.config.settings import Settings, get_settings

__all__ = [
    # settings
    "Settings",
    "get_settings",
    # browsers
    "DEFAULT_BROWSER_PATHS",
    "browser_table",
    "resolve_browser",
]
