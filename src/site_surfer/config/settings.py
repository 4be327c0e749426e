"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.  Every
knob that is not asked interactively lives here; never call ``os.getenv``
directly elsewhere in the codebase.

Usage::

    from site_surfer.config.settings import get_settings

    settings = get_settings()
    timeout = settings.navigation_timeout_seconds
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Run-wide configuration backed by ``SITE_SURFER_*`` variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="SITE_SURFER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    log_format: Literal["console", "json"] = "console"
    """``console`` prints human-readable progress lines; ``json`` emits one
    JSON object per line for log shippers."""

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------

    headless: bool = False
    """Launch the browser without a visible window.  Off by default: the tabs
    are meant to be watched."""

    viewport_width: int = Field(default=1920, ge=320)
    viewport_height: int = Field(default=1080, ge=240)

    navigation_timeout_seconds: float = Field(default=30.0, ge=0.0)
    """Upper bound for a single navigation.  ``0`` disables the bound, in which
    case a hung page stalls its batch indefinitely."""

    browser_paths: dict[str, str] = {}
    """Extra or overriding browser executables, keyed by browser name.

    Merged over :data:`site_surfer.config.browsers.DEFAULT_BROWSER_PATHS`, e.g.::

        SITE_SURFER_BROWSER_PATHS='{"chrome": "/usr/bin/google-chrome"}'
    """

    # ------------------------------------------------------------------
    # Site list
    # ------------------------------------------------------------------

    skip_blank_lines: bool = True
    """Drop entries that are empty after trimming when the site list is read.
    When ``False`` they reach the scheduler and are skipped there as invalid
    addresses."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings singleton.

    In tests, call ``get_settings.cache_clear()`` after patching environment
    variables.
    """
    return Settings()
