"""Derive test doubles of abstract interface classes, with default bodies for their methods."""

__version__ = "0.2.4"