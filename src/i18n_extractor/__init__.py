"""Relocate translation strings from JS/TS sources into JSON catalogs."""

__version__ = "0.1.0"
