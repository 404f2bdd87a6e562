"""langprune - remove unused translations from a wiki installation."""

__version__ = "0.1.0"
