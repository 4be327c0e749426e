"""Known browser executables and browser-name resolution.

The default table is immutable; callers build the effective table with
:func:`browser_table` and pass it explicitly to :func:`resolve_browser`.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from site_surfer.config.settings import Settings
from site_surfer.core.exceptions import UnknownBrowserError

#: Default install locations of the supported browsers.
DEFAULT_BROWSER_PATHS: Mapping[str, str] = MappingProxyType(
    {
        "chrome": r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        "edge": r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
    }
)


def browser_table(settings: Settings) -> Mapping[str, str]:
    """Return the defaults merged with ``settings.browser_paths`` (keys lower-cased)."""
    merged = dict(DEFAULT_BROWSER_PATHS)
    merged.update({name.lower(): path for name, path in settings.browser_paths.items()})
    return MappingProxyType(merged)


def resolve_browser(name: str, paths: Mapping[str, str]) -> str:
    """Return the executable path registered for ``name``.

    Args:
        name: Browser identifier as typed by the user.  Surrounding
            whitespace and case are ignored.
        paths: Browser name to executable path table.

    Returns:
        The executable path.

    Raises:
        UnknownBrowserError: If ``name`` is not a key of ``paths``.
    """
    key = name.strip().lower()
    try:
        return paths[key]
    except KeyError:
        raise UnknownBrowserError(name, known=sorted(paths)) from None
