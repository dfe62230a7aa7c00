"""Anchor-based score interpolation for ranked lists."""

__version__ = "0.1.0"
