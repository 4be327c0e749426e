"""Browser driver interface and its Playwright implementation.

The scheduler only talks to the abstract classes below, so that the tab
window logic can be exercised without a real browser and the backend can be
swapped without touching it.

Install Playwright's Chromium build (only needed when no executable path is
configured)::

    playwright install chromium
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from site_surfer.core.exceptions import BrowserLaunchError, NavigationFailedError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Launch options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LaunchOptions:
    """How the browser process is started.

    Attributes:
        executable_path: Browser binary, or ``None`` for Playwright's bundled
            Chromium.
        headless: Run without a visible window.
        viewport_width: Page viewport width in pixels.
        viewport_height: Page viewport height in pixels.
    """

    executable_path: str | None = None
    headless: bool = False
    viewport_width: int = 1920
    viewport_height: int = 1080


# ---------------------------------------------------------------------------
# Abstract interface
# ---------------------------------------------------------------------------


class AbstractPage(ABC):
    """A single tab."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Address currently loaded in the tab."""

    @abstractmethod
    async def goto(self, url: str, *, timeout_seconds: float) -> None:
        """Load ``url`` in this tab.

        Args:
            url: Scheme-qualified address.
            timeout_seconds: Navigation bound; ``0`` waits indefinitely.

        Raises:
            NavigationFailedError: If the page cannot be loaded.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close the tab."""


class AbstractBrowser(ABC):
    """A running browser owning a set of tabs."""

    @abstractmethod
    async def pages(self) -> list[AbstractPage]:
        """Return the tabs currently open."""

    @abstractmethod
    async def new_page(self) -> AbstractPage:
        """Open a new blank tab."""

    @abstractmethod
    async def close(self) -> None:
        """Close the browser and release every resource it holds."""


class AbstractBrowserDriver(ABC):
    """Factory for running browsers."""

    @abstractmethod
    async def launch(self, options: LaunchOptions) -> AbstractBrowser:
        """Start a browser.

        Raises:
            BrowserLaunchError: If the browser process cannot be started.
        """


# ---------------------------------------------------------------------------
# Playwright implementation
# ---------------------------------------------------------------------------


class PlaywrightPage(AbstractPage):
    """Adapter around ``playwright.async_api.Page``."""

    def __init__(self, page: Any) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def goto(self, url: str, *, timeout_seconds: float) -> None:
        try:
            await self._page.goto(url, timeout=timeout_seconds * 1000)
        except PlaywrightError as exc:
            # Playwright messages span several lines (call log); keep the first.
            lines = (exc.message or str(exc)).splitlines()
            reason = lines[0] if lines else type(exc).__name__
            raise NavigationFailedError(url, reason) from exc

    async def close(self) -> None:
        await self._page.close()


class PlaywrightBrowser(AbstractBrowser):
    """A Chromium instance with a single browser context."""

    def __init__(self, playwright: Any, browser: Any, context: Any) -> None:
        self._playwright = playwright
        self._browser = browser
        self._context = context

    async def pages(self) -> list[AbstractPage]:
        return [PlaywrightPage(page) for page in self._context.pages]

    async def new_page(self) -> AbstractPage:
        return PlaywrightPage(await self._context.new_page())

    async def close(self) -> None:
        """Close context, browser and the Playwright runtime, in that order.

        The runtime is stopped even if closing the browser fails.
        """
        try:
            await self._context.close()
            await self._browser.close()
            logger.info("driver: browser closed")
        finally:
            await self._playwright.stop()


class PlaywrightDriver(AbstractBrowserDriver):
    """Launches Chromium-family browsers through Playwright's async API."""

    async def launch(self, options: LaunchOptions) -> AbstractBrowser:
        try:
            playwright = await async_playwright().start()
        except Exception as exc:
            raise BrowserLaunchError(f"Playwright runtime failed to start: {exc}") from exc

        try:
            browser = await playwright.chromium.launch(
                headless=options.headless,
                executable_path=options.executable_path,
            )
            context = await browser.new_context(
                viewport={
                    "width": options.viewport_width,
                    "height": options.viewport_height,
                },
            )
        except PlaywrightError as exc:
            await playwright.stop()
            raise BrowserLaunchError(
                f"Browser launch failed ({options.executable_path or 'bundled chromium'}): "
                f"{exc.message}"
            ) from exc

        logger.info(
            "driver: launched %s (headless=%s)",
            options.executable_path or "bundled chromium",
            options.headless,
        )
        return PlaywrightBrowser(playwright, browser, context)
