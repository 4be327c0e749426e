"""Shared pytest fixtures for site-surfer tests.

Fixture summary
---------------
clean_settings  — isolates ``get_settings()`` from the developer's environment
no_sleep        — recording replacement for ``asyncio.sleep``
reset_logging   — removes handlers installed by ``configure_logging()``
site_file       — writes a site list to a temporary file

No test launches a real browser.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from site_surfer.config.settings import get_settings


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that only records durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Drop ``SITE_SURFER_*`` variables and any .env file from the picture."""
    for key in list(os.environ):
        if key.startswith("SITE_SURFER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo ``configure_logging()`` so handlers never outlive pytest's captured streams."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def no_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def site_file(tmp_path: Path) -> Callable[[str], Path]:
    """Return a writer: ``site_file("a.com\\nb.com")`` -> path of the new file."""

    def _write(content: str, name: str = "sites.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
