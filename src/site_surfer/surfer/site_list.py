"""Reading the list of sites to surf from a plain text file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from site_surfer.core.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)


def resolve_site_file(raw: str, base_dir: str | os.PathLike[str] | None = None) -> Path:
    """Resolve the user-supplied site list path and check it is readable.

    A relative path is taken relative to ``base_dir`` (the current working
    directory when omitted).

    Raises:
        SourceUnavailableError: If the file does not exist or cannot be read.
    """
    path = Path(raw.strip()).expanduser()
    if not path.is_absolute():
        path = Path(base_dir or Path.cwd()) / path
    if not path.is_file() or not os.access(path, os.R_OK):
        raise SourceUnavailableError(str(path))
    return path


def load_site_list(
    path: str | os.PathLike[str],
    *,
    skip_blank_lines: bool = True,
) -> tuple[str, ...]:
    """Return the entries of the site list in file order.

    The whole file and every line are stripped of surrounding whitespace.

    Args:
        path: Text file with one address per line.
        skip_blank_lines: Drop entries that are empty after trimming.  When
            ``False`` they are returned as ``""`` and left for the scheduler
            to reject.

    Returns:
        An immutable tuple of raw entries.

    Raises:
        SourceUnavailableError: If the file cannot be read or decoded.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailableError(str(path), reason=str(exc)) from exc

    entries = [line.strip() for line in content.strip().splitlines()]
    if skip_blank_lines:
        kept = [entry for entry in entries if entry]
        if len(kept) != len(entries):
            logger.debug("site_list: dropped %d blank line(s) from %s", len(entries) - len(kept), path)
        entries = kept

    logger.info("site_list: loaded %d entries from %s", len(entries), path)
    return tuple(entries)
