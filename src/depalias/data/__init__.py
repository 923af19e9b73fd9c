"""Bundled data files (default dependency catalog)."""
