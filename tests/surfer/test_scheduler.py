"""Unit tests for the tab-window scheduler.

Tests cover:
- sequential batches with a one-tab window (previous tab closed before the next opens)
- eviction making room for the next batch, then retiring tabs once the list is done
- the window never holding more than ``max_open_tabs`` live tabs
- every tab and the browser closed exactly once
- tabs joining the window in request order, not completion order
- failed navigations isolated to their own slot
- invalid entries skipped without opening a tab
- unexpected faults draining the window before surfacing as SchedulerError
- pacing: one pause per successful navigation plus one per iteration, none after the last tab closes

All tests run against :class:`tests.factories.browser.FakeBrowser`.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from site_surfer.core.exceptions import SchedulerError
from site_surfer.surfer.scheduler import OpenTabWindow, RunSummary, TabWindowScheduler
from tests.factories.browser import FakeBrowser
from tests.factories.run_config import RunConfigFactory, site_entries


def _url(i: int) -> str:
    return f"http://site{i}.example"


def _make_scheduler(browser, no_sleep, **config) -> TabWindowScheduler:
    return TabWindowScheduler(
        browser,
        RunConfigFactory.build(**config),
        navigation_timeout=5.0,
        sleep=no_sleep,
    )


# ---------------------------------------------------------------------------
# OpenTabWindow
# ---------------------------------------------------------------------------


def _tab(url: str) -> MagicMock:
    tab = MagicMock()
    tab.url = url
    tab.close = AsyncMock()
    return tab


@pytest.mark.asyncio
class TestOpenTabWindow:
    async def test_evict_to_closes_oldest_first(self) -> None:
        tabs = [_tab(f"http://t{i}") for i in range(4)]
        window = OpenTabWindow()
        window.append_batch(tabs)

        closed = await window.evict_to(1)

        assert closed == 3
        assert len(window) == 1
        assert list(window) == [tabs[3]]
        for tab in tabs[:3]:
            tab.close.assert_awaited_once()
        tabs[3].close.assert_not_awaited()

    async def test_evict_to_noop_when_under_target(self) -> None:
        window = OpenTabWindow()
        window.append_batch([_tab("http://a")])

        assert await window.evict_to(3) == 0
        assert len(window) == 1

    async def test_negative_target_empties_window(self) -> None:
        window = OpenTabWindow()
        window.append_batch([_tab("http://a"), _tab("http://b")])

        assert await window.evict_to(-4) == 2
        assert len(window) == 0

    async def test_drain_continues_past_close_failure(self) -> None:
        broken = _tab("http://broken")
        broken.close.side_effect = RuntimeError("target closed")
        healthy = _tab("http://healthy")
        window = OpenTabWindow()
        window.append_batch([broken, healthy])

        closed = await window.drain()

        assert closed == 1
        assert len(window) == 0
        healthy.close.assert_awaited_once()

    async def test_failed_eviction_still_removes_tab(self) -> None:
        broken = _tab("http://broken")
        broken.close.side_effect = RuntimeError("target closed")
        window = OpenTabWindow()
        window.append_batch([broken])

        with pytest.raises(RuntimeError):
            await window.evict_to(0)

        assert len(window) == 0


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestScenarios:
    async def test_one_tab_window_closes_previous_tab_before_next_open(self, no_sleep) -> None:
        browser = FakeBrowser()
        scheduler = _make_scheduler(browser, no_sleep, batch_size=1, max_open_tabs=1, wait_seconds=1)

        summary = await scheduler.run_to_completion(["example.com", "https://example.org"])

        assert browser.events == [
            ("open", "0"),
            ("goto", "http://example.com"),
            ("loaded", "http://example.com"),
            ("close", "http://example.com"),
            ("open", "1"),
            ("goto", "https://example.org"),
            ("loaded", "https://example.org"),
            ("close", "https://example.org"),
            ("browser_close", ""),
        ]
        assert summary.batches == 2
        assert summary.navigated == 2

    async def test_eviction_makes_room_then_window_winds_down(self, no_sleep) -> None:
        browser = FakeBrowser()
        scheduler = _make_scheduler(browser, no_sleep, batch_size=3, max_open_tabs=3)

        summary = await scheduler.run_to_completion(site_entries(5))

        opens_and_closes = [e for e in browser.events if e[0] in ("open", "close")]
        assert opens_and_closes == [
            ("open", "0"),
            ("open", "1"),
            ("open", "2"),
            # batch 2 needs two slots: the two oldest tabs go first
            ("close", _url(0)),
            ("close", _url(1)),
            ("open", "3"),
            ("open", "4"),
            # list exhausted: remaining tabs retired oldest first
            ("close", _url(2)),
            ("close", _url(3)),
            ("close", _url(4)),
        ]
        assert browser.max_live == 3
        assert summary.batches == 2
        assert summary.evicted == 5

    async def test_wind_down_retires_one_batch_per_iteration(self, no_sleep) -> None:
        browser = FakeBrowser()
        scheduler = _make_scheduler(browser, no_sleep, batch_size=2, max_open_tabs=6, wait_seconds=3)

        await scheduler.run_to_completion(site_entries(6))

        # 6 post-navigation pauses, 3 opening iterations, 2 wind-down iterations;
        # the pass that empties the window does not pause
        assert no_sleep.calls == [3] * 11
        assert browser.closed_urls == [_url(i) for i in range(6)]

    async def test_no_pause_after_window_empties(self) -> None:
        browser = FakeBrowser()
        events: list[tuple[str, str]] = browser.events

        async def record_pause(seconds: float) -> None:
            events.append(("pause", str(seconds)))

        scheduler = TabWindowScheduler(
            browser,
            RunConfigFactory.build(batch_size=1, max_open_tabs=1, wait_seconds=2),
            sleep=record_pause,
        )

        await scheduler.run_to_completion(site_entries(1))

        assert events[-3:] == [
            ("pause", "2"),
            ("close", _url(0)),
            ("browser_close", ""),
        ]


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestInvariants:
    @pytest.mark.parametrize(
        ("batch_size", "max_open_tabs", "entries"),
        [
            (1, 1, 5),
            (2, 3, 7),
            (3, 3, 5),
            (4, 10, 23),
            (5, 5, 1),
            (60, 60, 61),
        ],
    )
    async def test_window_bound_and_single_close(
        self, no_sleep, batch_size: int, max_open_tabs: int, entries: int
    ) -> None:
        browser = FakeBrowser()
        scheduler = _make_scheduler(
            browser, no_sleep, batch_size=batch_size, max_open_tabs=max_open_tabs
        )

        summary = await scheduler.run_to_completion(site_entries(entries))

        assert browser.max_live <= max_open_tabs
        assert len(browser.created) == entries
        assert all(page.close_count == 1 for page in browser.created)
        assert browser.close_count == 1
        assert scheduler.cursor == entries
        assert len(scheduler.window) == 0
        assert summary.attempted == entries

    async def test_empty_list_closes_browser_without_opening(self, no_sleep) -> None:
        browser = FakeBrowser()
        scheduler = _make_scheduler(browser, no_sleep)

        summary = await scheduler.run_to_completion([])

        assert browser.events == [("browser_close", "")]
        assert summary == RunSummary(total=0)
        assert no_sleep.calls == []

    async def test_initial_blank_tab_closed_first(self, no_sleep) -> None:
        browser = FakeBrowser(initial_pages=1)
        scheduler = _make_scheduler(browser, no_sleep)

        await scheduler.run_to_completion(site_entries(1))

        assert browser.events[0] == ("close", "about:blank")
        assert browser.created[0].close_count == 1

    async def test_navigation_timeout_forwarded(self, no_sleep) -> None:
        browser = FakeBrowser()
        scheduler = TabWindowScheduler(
            browser, RunConfigFactory.build(), navigation_timeout=12.5, sleep=no_sleep
        )

        await scheduler.run_to_completion(site_entries(1))

        assert browser.created[0].goto_timeouts == [12.5]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestRequestOrder:
    async def test_window_follows_request_order_not_completion_order(self, no_sleep) -> None:
        # site0 finishes last, site2 first
        browser = FakeBrowser(delays={_url(0): 0.05, _url(1): 0.02})
        scheduler = _make_scheduler(browser, no_sleep, batch_size=3, max_open_tabs=3)

        await scheduler.run_to_completion(site_entries(6))

        loaded = [value for kind, value in browser.events if kind == "loaded"]
        assert loaded[:3] == [_url(2), _url(1), _url(0)]
        assert browser.closed_urls[:3] == [_url(0), _url(1), _url(2)]


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestFailureIsolation:
    async def test_failed_navigation_closes_only_its_tab(self, no_sleep) -> None:
        browser = FakeBrowser(fail_urls={_url(1)}, delays={_url(0): 0.02, _url(2): 0.02})
        scheduler = _make_scheduler(browser, no_sleep, batch_size=3, max_open_tabs=3)

        summary = await scheduler.run_to_completion(site_entries(5))

        loaded = [value for kind, value in browser.events if kind == "loaded"]
        assert loaded == [_url(0), _url(2), _url(3), _url(4)]
        assert summary.failed == 1
        assert summary.navigated == 4
        assert summary.attempted == 5
        assert summary.batches == 2
        assert all(page.close_count == 1 for page in browser.created)

    async def test_failed_navigation_skips_post_navigation_pause(self, no_sleep) -> None:
        browser = FakeBrowser(fail_urls={_url(0)})
        scheduler = _make_scheduler(browser, no_sleep, batch_size=1, max_open_tabs=1, wait_seconds=7)

        summary = await scheduler.run_to_completion(site_entries(1))

        assert no_sleep.calls == [7]
        assert summary.failed == 1
        assert len(scheduler.window) == 0

    async def test_invalid_entries_skipped_without_a_tab(self, no_sleep) -> None:
        browser = FakeBrowser()
        scheduler = _make_scheduler(browser, no_sleep, batch_size=2, max_open_tabs=2)

        summary = await scheduler.run_to_completion(["", "bad host.example", "good.example"])

        assert browser.navigations == ["http://good.example"]
        assert len(browser.created) == 1
        assert summary.skipped == 2
        assert summary.attempted == 1
        assert scheduler.cursor == 3

    async def test_unexpected_fault_drains_and_raises(self, no_sleep) -> None:
        browser = FakeBrowser(
            crash_urls={_url(1): RuntimeError("renderer crashed")},
            delays={_url(2): 0.02},
        )
        scheduler = _make_scheduler(browser, no_sleep, batch_size=3, max_open_tabs=3)

        with pytest.raises(SchedulerError) as exc_info:
            await scheduler.run_to_completion(site_entries(6))

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        # the slower sibling still finished before the run was torn down
        assert ("loaded", _url(2)) in browser.events
        assert len(browser.created) == 3
        assert all(page.close_count == 1 for page in browser.created)
        assert browser.close_count == 1
        assert browser.events[-1] == ("browser_close", "")
        assert scheduler.cursor == 3

    async def test_fault_during_inter_batch_pause_drains(self) -> None:
        browser = FakeBrowser()
        calls: list[float] = []

        async def sleep_then_fail(seconds: float) -> None:
            calls.append(seconds)
            # 1st call: pause after site0 loads; 2nd: pause after batch 1
            if len(calls) == 2:
                raise OSError("pipe closed")

        scheduler = TabWindowScheduler(
            browser,
            RunConfigFactory.build(batch_size=1, max_open_tabs=1),
            sleep=sleep_then_fail,
        )

        with pytest.raises(SchedulerError, match="pipe closed"):
            await scheduler.run_to_completion(site_entries(3))

        assert scheduler.cursor == 1
        assert browser.navigations == [_url(0)]
        assert browser.close_count == 1
        assert all(page.close_count == 1 for page in browser.created)
