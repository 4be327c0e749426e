"""Launching the browser and handing it to the scheduler."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from site_surfer.core.schemas import RunConfig
from site_surfer.surfer.driver import AbstractBrowserDriver, LaunchOptions
from site_surfer.surfer.scheduler import RunSummary, SleepFunc, TabWindowScheduler


async def surf(
    site_list: Sequence[str],
    config: RunConfig,
    driver: AbstractBrowserDriver,
    options: LaunchOptions,
    *,
    navigation_timeout: float = 30.0,
    sleep: SleepFunc = asyncio.sleep,
) -> RunSummary:
    """Launch a browser and surf ``site_list`` with it.

    Launch failures propagate as
    :class:`~site_surfer.core.exceptions.BrowserLaunchError` before any tab
    is opened; once launched, the browser is always closed.

    Args:
        site_list: Raw entries to visit in order.
        config: Validated run parameters.
        driver: Browser backend.
        options: How to start the browser.
        navigation_timeout: Per-navigation bound in seconds (``0`` = none).
        sleep: Awaitable used for every pause.

    Returns:
        The scheduler's :class:`RunSummary`.
    """
    browser = await driver.launch(options)
    scheduler = TabWindowScheduler(
        browser,
        config,
        navigation_timeout=navigation_timeout,
        sleep=sleep,
    )
    return await scheduler.run_to_completion(site_list)
