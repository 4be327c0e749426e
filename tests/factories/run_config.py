"""Factory Boy factory for run parameters, plus a site list helper.

Usage::

    from tests.factories.run_config import RunConfigFactory, site_entries

    config = RunConfigFactory.build(batch_size=3, max_open_tabs=3)
    sites = site_entries(5)
"""

from __future__ import annotations

import factory

from site_surfer.core.schemas import RunConfig


class RunConfigFactory(factory.Factory):
    """Factory for :class:`~site_surfer.core.schemas.RunConfig`."""

    class Meta:
        model = RunConfig

    batch_size = 2
    max_open_tabs = 4
    wait_seconds = 1


def site_entries(count: int) -> tuple[str, ...]:
    """Return ``count`` bare-host entries: ``site0.example``, ``site1.example``..."""
    return tuple(f"site{i}.example" for i in range(count))
