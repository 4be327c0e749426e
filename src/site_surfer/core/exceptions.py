"""Application-wide exception hierarchy for site-surfer.

All custom exceptions subclass ``SiteSurferError``, enabling consistent error
handling and structured logging across the application.

Hierarchy::

    SiteSurferError
    ├── SourceUnavailableError   (fatal, before launch)
    ├── InvalidConfigError       (recovered by re-asking)
    ├── UnknownBrowserError      (fatal, before launch)
    ├── BrowserLaunchError       (fatal, nothing to drain)
    ├── AddressInvalidError      (per address, skipped)
    ├── NavigationFailedError    (per address, tab closed and skipped)
    └── SchedulerError           (unexpected fault, raised after drain)
"""

from __future__ import annotations

from collections.abc import Sequence


class SiteSurferError(Exception):
    """Base class for all site-surfer exceptions."""


# ---------------------------------------------------------------------------
# Run set-up
# ---------------------------------------------------------------------------


class SourceUnavailableError(SiteSurferError):
    """Raised when the site list cannot be read.

    Args:
        path: The path that was requested.
        reason: Human-readable cause (``"not found"``, the OS error text...).
    """

    def __init__(self, path: str, reason: str | None = None) -> None:
        msg = f"Site list '{path}' does not exist or is not readable"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.path = path
        self.reason = reason


class InvalidConfigError(SiteSurferError):
    """Raised when a configuration value is out of range or not a number.

    Args:
        field: Name of the rejected setting (e.g. ``"batch_size"``).
        value: The raw value as supplied.
        message: Optional override of the default message.
    """

    def __init__(self, field: str, value: object, message: str | None = None) -> None:
        super().__init__(message or f"Invalid value for {field}: {value!r}")
        self.field = field
        self.value = value


class UnknownBrowserError(SiteSurferError):
    """Raised when the selected browser has no known executable.

    Args:
        name: Browser name as supplied.
        known: Names that would have been accepted.
    """

    def __init__(self, name: str, known: Sequence[str] = ()) -> None:
        msg = f"Invalid browser name provided: '{name}'"
        if known:
            msg += f" (expected one of: {', '.join(known)})"
        super().__init__(msg)
        self.name = name
        self.known = tuple(known)


class BrowserLaunchError(SiteSurferError):
    """Raised when the browser process cannot be started."""


# ---------------------------------------------------------------------------
# Per-address failures
# ---------------------------------------------------------------------------


class AddressInvalidError(SiteSurferError):
    """Raised when a site list entry cannot be turned into a usable address.

    Args:
        raw: The entry as read from the site list.
    """

    def __init__(self, raw: str) -> None:
        super().__init__(f'URL "{raw}" in the list is not valid')
        self.raw = raw


class NavigationFailedError(SiteSurferError):
    """Raised when a page fails to navigate (timeout, DNS, refused...).

    Args:
        url: The address that was being loaded.
        reason: Driver-supplied description of the failure.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Error while navigating to {url}: {reason}")
        self.url = url
        self.reason = reason


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------


class SchedulerError(SiteSurferError):
    """Raised after the tab window has been drained following an unexpected fault.

    The original exception is chained as ``__cause__``.
    """
