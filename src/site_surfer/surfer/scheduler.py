"""Tab-window scheduler: opens the site list in batches under a bounded window of tabs.

One run proceeds in iterations.  Each iteration:

1. computes the next batch, ``min(batch_size, remaining)`` entries;
2. evicts (closes) the oldest tabs until the batch fits under
   ``max_open_tabs``, or, once the list is exhausted, retires up to
   ``batch_size`` of the oldest tabs;
3. opens and navigates the batch concurrently, each tab pausing
   ``wait_seconds`` after a successful navigation;
4. appends the surviving tabs to the window in request order;
5. pauses ``wait_seconds``, unless the list is done and the window is empty.

Iterations repeat while entries remain or tabs are still open.  Invalid
addresses and failed navigations only cost their own slot.  Any other fault
stops the run; the window and the browser are then drained and the fault is
re-raised as :class:`~site_surfer.core.exceptions.SchedulerError`.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable, Iterable, Iterator, Sequence
from dataclasses import asdict, dataclass

import structlog

from site_surfer.core.exceptions import (
    AddressInvalidError,
    NavigationFailedError,
    SchedulerError,
)
from site_surfer.core.schemas import RunConfig
from site_surfer.surfer.address import to_navigable_address
from site_surfer.surfer.driver import AbstractBrowser, AbstractPage

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


# ---------------------------------------------------------------------------
# Run summary
# ---------------------------------------------------------------------------


@dataclass
class RunSummary:
    """Counters reported at the end of a run.

    Attributes:
        total: Entries in the site list.
        navigated: Tabs that loaded successfully.
        failed: Navigations that failed (tab closed immediately).
        skipped: Entries rejected as invalid addresses (no tab opened).
        batches: Batches opened.
        evicted: Tabs closed by the window, excluding the final drain.
    """

    total: int = 0
    navigated: int = 0
    failed: int = 0
    skipped: int = 0
    batches: int = 0
    evicted: int = 0

    @property
    def attempted(self) -> int:
        """Navigation attempts issued (successful or not)."""
        return self.navigated + self.failed


# ---------------------------------------------------------------------------
# Open-tab window
# ---------------------------------------------------------------------------


class OpenTabWindow:
    """FIFO of live tabs, oldest first.

    A tab is removed from the window before it is closed, so it is closed
    exactly once whatever happens during the close.
    """

    def __init__(self) -> None:
        self._tabs: deque[AbstractPage] = deque()

    def __len__(self) -> int:
        return len(self._tabs)

    def __iter__(self) -> Iterator[AbstractPage]:
        return iter(tuple(self._tabs))

    def append_batch(self, tabs: Iterable[AbstractPage]) -> None:
        """Append ``tabs`` as the newest entries, preserving their order."""
        self._tabs.extend(tabs)

    async def evict_to(self, size: int) -> int:
        """Close the oldest tabs until at most ``size`` remain.

        Each close is awaited before the next one starts.

        Returns:
            Number of tabs closed.
        """
        closed = 0
        while len(self._tabs) > max(size, 0):
            tab = self._tabs.popleft()
            await tab.close()
            closed += 1
            logger.debug("tab_evicted", url=tab.url, window=len(self._tabs))
        return closed

    async def drain(self) -> int:
        """Close every remaining tab, carrying on past individual close failures.

        Returns:
            Number of tabs closed successfully.
        """
        closed = 0
        while self._tabs:
            tab = self._tabs.popleft()
            try:
                await tab.close()
                closed += 1
            except Exception as exc:  # noqa: BLE001
                logger.warning("tab_close_failed", url=tab.url, error=str(exc))
        return closed


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------


class TabWindowScheduler:
    """Drives one browser through a site list, batch by batch.

    The scheduler owns the browser for the whole run: it closes the tabs it
    finds open at start-up, every tab it opens, and finally the browser
    itself.

    Args:
        browser: A launched browser, exclusively owned from now on.
        config: Validated run parameters.
        navigation_timeout: Per-navigation bound in seconds (``0`` = none).
        sleep: Awaitable used for every pause; swapped out in tests.
    """

    def __init__(
        self,
        browser: AbstractBrowser,
        config: RunConfig,
        *,
        navigation_timeout: float = 30.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._browser = browser
        self._config = config
        self._navigation_timeout = navigation_timeout
        self._sleep = sleep
        self._window = OpenTabWindow()
        self._cursor = 0
        self._browser_closed = False

    @property
    def cursor(self) -> int:
        """Index of the next unconsumed site list entry."""
        return self._cursor

    @property
    def window(self) -> OpenTabWindow:
        return self._window

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run_to_completion(self, site_list: Sequence[str]) -> RunSummary:
        """Surf every entry of ``site_list`` and close the browser.

        Args:
            site_list: Raw entries, consumed in order.

        Returns:
            The run's :class:`RunSummary`.

        Raises:
            SchedulerError: On any fault other than an invalid address or a
                failed navigation, after every tab and the browser have been
                closed.
        """
        summary = RunSummary(total=len(site_list))
        logger.info(
            "run_started",
            entries=summary.total,
            batch_size=self._config.batch_size,
            max_open_tabs=self._config.max_open_tabs,
            wait_seconds=self._config.wait_seconds,
        )
        try:
            await self._close_initial_pages()
            while self._cursor < len(site_list) or len(self._window) > 0:
                await self._step(site_list, summary)
        except Exception as exc:
            logger.error(
                "run_aborted",
                cursor=self._cursor,
                window=len(self._window),
                error=str(exc),
                exc_info=True,
            )
            raise SchedulerError(
                f"Surfing aborted at entry {self._cursor} of {summary.total}: {exc}"
            ) from exc
        finally:
            await self._drain()

        logger.info("run_complete", attempted=summary.attempted, **asdict(summary))
        return summary

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def _eviction_target(self, pending: int) -> int:
        """Window size to shrink to before opening ``pending`` tabs."""
        if pending:
            return self._config.max_open_tabs - pending
        # List exhausted: retire the oldest batch's worth of tabs per pass.
        return len(self._window) - self._config.batch_size

    async def _step(self, site_list: Sequence[str], summary: RunSummary) -> None:
        pending = min(self._config.batch_size, len(site_list) - self._cursor)

        summary.evicted += await self._window.evict_to(self._eviction_target(pending))

        if pending:
            batch = site_list[self._cursor : self._cursor + pending]
            await self._open_batch(batch, summary)

        if pending or len(self._window):
            await self._sleep(self._config.wait_seconds)

    async def _open_batch(self, batch: Sequence[str], summary: RunSummary) -> None:
        """Open ``batch`` concurrently and append the survivors to the window.

        Every member is awaited before anything is appended.  If a member
        failed unexpectedly, the tabs its siblings opened still join the
        window (so they get drained) before the failure is re-raised.
        """
        results = await asyncio.gather(
            *(self._open_tab(raw, summary) for raw in batch),
            return_exceptions=True,
        )

        tabs: list[AbstractPage] = []
        unexpected: BaseException | None = None
        for result in results:
            if isinstance(result, BaseException):
                unexpected = unexpected or result
            elif result is not None:
                tabs.append(result)

        self._window.append_batch(tabs)
        self._cursor += len(batch)
        summary.batches += 1
        logger.info(
            "batch_settled",
            batch=summary.batches,
            opened=len(tabs),
            requested=len(batch),
            cursor=self._cursor,
            window=len(self._window),
        )

        if unexpected is not None:
            raise unexpected

    async def _open_tab(self, raw: str, summary: RunSummary) -> AbstractPage | None:
        """Open one tab for ``raw``; ``None`` when the slot yields no tab."""
        try:
            url = to_navigable_address(raw)
        except AddressInvalidError as exc:
            logger.warning("address_skipped", entry=raw, reason=str(exc))
            summary.skipped += 1
            return None

        page = await self._browser.new_page()
        try:
            logger.info("navigating", url=url)
            await page.goto(url, timeout_seconds=self._navigation_timeout)
        except NavigationFailedError as exc:
            logger.error("navigation_failed", url=url, reason=exc.reason)
            summary.failed += 1
            await page.close()
            return None
        except Exception:
            await page.close()
            raise

        summary.navigated += 1
        await self._sleep(self._config.wait_seconds)
        return page

    # ------------------------------------------------------------------
    # Set-up and tear-down
    # ------------------------------------------------------------------

    async def _close_initial_pages(self) -> None:
        """Close the blank tab(s) a freshly launched browser may show."""
        for page in await self._browser.pages():
            await page.close()

    async def _drain(self) -> None:
        """Close the remaining tabs, then the browser (once)."""
        if self._browser_closed:
            return
        self._browser_closed = True
        try:
            closed = await self._window.drain()
            if closed:
                logger.info("window_drained", closed=closed)
        finally:
            await self._browser.close()
