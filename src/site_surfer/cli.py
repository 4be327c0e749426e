"""Command-line entry point: surf a list of websites in a sliding window of tabs.

Usage::

    site-surfer
    site-surfer --browser chrome --file sites.txt --batch-size 3 --max-open-tabs 6 --wait 5

Any value not given as a flag is asked interactively.  The browser name is
resolved first, then the site list file is checked; neither failure ever
launches a browser.

Environment variables (via .env or shell), see
:class:`site_surfer.config.settings.Settings`::

    SITE_SURFER_LOG_LEVEL                   DEBUG/INFO/WARNING/ERROR
    SITE_SURFER_LOG_FORMAT                  console or json
    SITE_SURFER_HEADLESS                    true/false
    SITE_SURFER_NAVIGATION_TIMEOUT_SECONDS  0 disables the bound
    SITE_SURFER_SKIP_BLANK_LINES            true/false
    SITE_SURFER_BROWSER_PATHS               JSON object name -> executable

Exit codes:
    0 — Every entry was processed (individual failures are only logged).
    1 — Unknown browser, unreadable site list, launch failure or aborted run.
    2 — Invalid command-line flags.
    130 — Interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import uuid
from collections.abc import Sequence

import structlog

from site_surfer.config.browsers import browser_table, resolve_browser
from site_surfer.config.settings import get_settings
from site_surfer.core.exceptions import SiteSurferError
from site_surfer.core.logging_config import configure_logging, run_id_var
from site_surfer.core.schemas import MAX_VALUE, MIN_VALUE, max_open_tabs_ok
from site_surfer.surfer.driver import AbstractBrowserDriver, LaunchOptions, PlaywrightDriver
from site_surfer.surfer.prompts import PromptSource
from site_surfer.surfer.runner import surf
from site_surfer.surfer.site_list import load_site_list, resolve_site_file

logger = structlog.get_logger(__name__)


def _bounded_int(raw: str) -> int:
    """argparse ``type`` for the numeric run parameters."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number: {raw!r}") from None
    if not MIN_VALUE <= value <= MAX_VALUE:
        raise argparse.ArgumentTypeError(
            f"must be between {MIN_VALUE} and {MAX_VALUE}, got {value}"
        )
    return value


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``; unset values are ``None``.
    """
    parser = argparse.ArgumentParser(
        prog="site-surfer",
        description="Open a list of websites in browser tabs, a few at a time.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--browser", help="Browser name (e.g. chrome, edge).")
    parser.add_argument("--file", help="Text file with one website per line.")
    parser.add_argument(
        "--batch-size",
        type=_bounded_int,
        help=f"Tabs to open at once ({MIN_VALUE}-{MAX_VALUE}).",
    )
    parser.add_argument(
        "--max-open-tabs",
        type=_bounded_int,
        help=f"Tabs allowed open in total (batch size-{MAX_VALUE}).",
    )
    parser.add_argument(
        "--wait",
        dest="wait_seconds",
        type=_bounded_int,
        help=f"Seconds to wait after each page and between batches ({MIN_VALUE}-{MAX_VALUE}).",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        default=None,
        help="Run the browser without a window (overrides SITE_SURFER_HEADLESS).",
    )
    parser.add_argument("--log-level", help="Overrides SITE_SURFER_LOG_LEVEL.")
    parser.add_argument(
        "--log-format",
        choices=("console", "json"),
        help="Overrides SITE_SURFER_LOG_FORMAT.",
    )
    args = parser.parse_args(argv)
    if (
        args.batch_size is not None
        and args.max_open_tabs is not None
        and not max_open_tabs_ok(args.max_open_tabs, args.batch_size)
    ):
        parser.error(
            f"--max-open-tabs ({args.max_open_tabs}) must be at least "
            f"--batch-size ({args.batch_size})"
        )
    return args


def main(
    argv: Sequence[str] | None = None,
    *,
    prompts: PromptSource | None = None,
    driver: AbstractBrowserDriver | None = None,
) -> int:
    """Entry point for the ``site-surfer`` command.

    Args:
        argv: Command-line arguments (``sys.argv[1:]`` when ``None``).
        prompts: Source of interactive answers.
        driver: Browser backend (Playwright when ``None``).

    Returns:
        The process exit code.
    """
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(
        args.log_level or settings.log_level,
        args.log_format or settings.log_format,
    )
    prompts = prompts or PromptSource()
    driver = driver or PlaywrightDriver()
    run_id_var.set(uuid.uuid4().hex[:8])

    try:
        paths = browser_table(settings)
        if args.browser is not None:
            executable_path = resolve_browser(args.browser, paths)
        else:
            executable_path = prompts.ask_browser(paths)

        site_file = resolve_site_file(args.file if args.file is not None else prompts.ask_site_file())

        max_open_tabs = args.max_open_tabs
        batch_size = args.batch_size if args.batch_size is not None else prompts.ask_batch_size()
        if max_open_tabs is not None and not max_open_tabs_ok(max_open_tabs, batch_size):
            print(
                f"Error: --max-open-tabs {max_open_tabs} is below the batch size {batch_size}.",
                file=sys.stderr,
            )
            max_open_tabs = None
        config = prompts.ask_run_config(
            batch_size=batch_size,
            max_open_tabs=max_open_tabs,
            wait_seconds=args.wait_seconds,
        )

        site_list = load_site_list(site_file, skip_blank_lines=settings.skip_blank_lines)
        options = LaunchOptions(
            executable_path=executable_path,
            headless=settings.headless if args.headless is None else args.headless,
            viewport_width=settings.viewport_width,
            viewport_height=settings.viewport_height,
        )
        summary = asyncio.run(
            surf(
                site_list,
                config,
                driver,
                options,
                navigation_timeout=settings.navigation_timeout_seconds,
            )
        )
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except SiteSurferError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.info(
        "surfing_finished",
        navigated=summary.navigated,
        failed=summary.failed,
        skipped=summary.skipped,
    )
    return 0
