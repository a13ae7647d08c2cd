"""Tessera - overlapping Wave Function Collapse from sample tile maps."""

__version__ = "0.1.0"
