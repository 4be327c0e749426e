"""site-surfer: open a list of websites in browser tabs, a bounded window at a time."""

__version__ = "1.0.0"
