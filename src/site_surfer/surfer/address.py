"""Address normalization for site list entries.

All functions in this module are pure (no I/O).
"""

from __future__ import annotations

import urllib.parse

from site_surfer.core.exceptions import AddressInvalidError

#: Scheme prefixes accepted as already qualified (compared case-insensitively).
_SCHEME_PREFIXES: tuple[str, ...] = ("http://", "https://")

#: Scheme prepended to bare addresses.
DEFAULT_SCHEME_PREFIX: str = "http://"


def normalize_address(raw: str) -> str:
    """Return ``raw`` with an ``http://`` prefix unless it already carries a scheme.

    Idempotent: ``normalize_address(normalize_address(x)) == normalize_address(x)``.
    """
    if raw.lower().startswith(_SCHEME_PREFIXES):
        return raw
    return f"{DEFAULT_SCHEME_PREFIX}{raw}"


def validate_address(address: str) -> str:
    """Return ``address`` unchanged if a browser could be pointed at it.

    Raises:
        AddressInvalidError: If the address has no host or contains
            whitespace (for example ``"http://"`` produced from a blank line).
    """
    if any(ch.isspace() for ch in address):
        raise AddressInvalidError(address)
    try:
        netloc = urllib.parse.urlsplit(address).netloc
    except ValueError:
        raise AddressInvalidError(address) from None
    if not netloc:
        raise AddressInvalidError(address)
    return address


def to_navigable_address(raw: str) -> str:
    """Normalize ``raw`` and validate the result.

    Raises:
        AddressInvalidError: If the normalized address is unusable.  The
            error carries the original entry, not the normalized one.
    """
    try:
        return validate_address(normalize_address(raw))
    except AddressInvalidError:
        raise AddressInvalidError(raw) from None
