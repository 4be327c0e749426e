"""Factory Boy factories and in-memory browser fakes for test data generation.

Available factories
-------------------
RunConfigFactory    — validated RunConfig (batch 2, window 4, wait 1)
site_entries        — bare host site list entries (``site0.example``...)
FakeDriver          — records launches; hands out a FakeBrowser
FakeBrowser         — records every open, navigation and close
FakePage            — tab whose navigation can be made to fail, crash or lag
"""

from __future__ import annotations

from tests.factories.browser import FakeBrowser, FakeDriver, FakePage
from tests.factories.run_config import RunConfigFactory, site_entries

__all__ = [
    "FakeBrowser",
    "FakeDriver",
    "FakePage",
    "RunConfigFactory",
    "site_entries",
]
