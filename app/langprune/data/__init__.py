"""Bundled data files for langprune."""
