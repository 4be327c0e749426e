"""Interactive prompts for the values a run needs.

Every numeric question is a plain retry loop around an acceptance predicate
from :mod:`site_surfer.core.schemas`; bad input prints an error and asks
again.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from typing import TextIO

from site_surfer.config.browsers import resolve_browser
from site_surfer.core.exceptions import InvalidConfigError
from site_surfer.core.schemas import (
    MAX_VALUE,
    MIN_VALUE,
    RunConfig,
    batch_size_ok,
    max_open_tabs_ok,
    wait_seconds_ok,
)


def parse_int(raw: str) -> int | None:
    """Return ``raw`` as an ``int``, or ``None`` if it is not a whole number."""
    try:
        return int(raw.strip())
    except ValueError:
        return None


class PromptSource:
    """Asks the user for run parameters on a text terminal.

    Args:
        input_func: Reads one answer given a question (``input`` by default).
        output: Stream that receives error messages.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: TextIO | None = None,
    ) -> None:
        self._input = input_func
        self._output = output if output is not None else sys.stderr

    def ask(self, question: str, field: str) -> str:
        """Return one raw answer.

        Raises:
            InvalidConfigError: If input ends before an answer is given.
        """
        try:
            return self._input(question)
        except EOFError:
            raise InvalidConfigError(field, None, f"No answer given for {field}") from None

    def ask_int(
        self,
        question: str,
        field: str,
        accept: Callable[[int], bool],
        error: str,
    ) -> int:
        """Ask ``question`` until the answer is an integer ``accept`` approves."""
        while True:
            value = parse_int(self.ask(question, field))
            if value is not None and accept(value):
                return value
            print(f"Error: {error}", file=self._output)

    # ------------------------------------------------------------------
    # Run parameters
    # ------------------------------------------------------------------

    def ask_browser(self, paths: Mapping[str, str]) -> str:
        """Ask for a browser name and return its executable path.

        Raises:
            UnknownBrowserError: If the name is not in ``paths``.
        """
        names = "/".join(paths)
        answer = self.ask(f"Enter the name of your preferred browser ({names}): ", "browser")
        return resolve_browser(answer, paths)

    def ask_site_file(self) -> str:
        return self.ask("Enter the path to the text file with the list of websites: ", "file")

    def ask_batch_size(self) -> int:
        return self.ask_int(
            f"Enter the maximum number of tabs to open at once "
            f"(between {MIN_VALUE} and {MAX_VALUE}): ",
            "batch_size",
            batch_size_ok,
            f"Invalid input. Please provide a valid number between {MIN_VALUE} and {MAX_VALUE}.",
        )

    def ask_max_open_tabs(self, batch_size: int) -> int:
        return self.ask_int(
            f"Enter the maximum number of tabs to be opened in total "
            f"(greater than or equal to {batch_size}, between {MIN_VALUE} and {MAX_VALUE}): ",
            "max_open_tabs",
            lambda value: max_open_tabs_ok(value, batch_size),
            f"Invalid input. Please provide a valid number between {batch_size} and {MAX_VALUE}.",
        )

    def ask_wait_seconds(self) -> int:
        return self.ask_int(
            f"Enter the time to wait in seconds before accessing a new website "
            f"(between {MIN_VALUE} and {MAX_VALUE}): ",
            "wait_seconds",
            wait_seconds_ok,
            f"Invalid input. Please provide a valid number between {MIN_VALUE} and {MAX_VALUE}.",
        )

    def ask_run_config(
        self,
        *,
        batch_size: int | None = None,
        max_open_tabs: int | None = None,
        wait_seconds: int | None = None,
    ) -> RunConfig:
        """Build a :class:`RunConfig`, asking only for the values not supplied.

        Values are asked in order: batch size, max open tabs, wait seconds.
        """
        if batch_size is None:
            batch_size = self.ask_batch_size()
        if max_open_tabs is None:
            max_open_tabs = self.ask_max_open_tabs(batch_size)
        if wait_seconds is None:
            wait_seconds = self.ask_wait_seconds()
        return RunConfig(
            batch_size=batch_size,
            max_open_tabs=max_open_tabs,
            wait_seconds=wait_seconds,
        )
