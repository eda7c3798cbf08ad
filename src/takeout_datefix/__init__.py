"""Google Takeout capture-date restoration."""

__version__ = "0.1.0"
