"""Overlapping Wave Function Collapse."""

from .pattern import Pattern, PatternCatalog, build_catalog, extract_pattern, pattern_size
from .cell import (
    Superposition,
    Collapsed,
    Contradiction,
    WaveCell,
    WaveError,
    InvalidCellStateError,
    candidates_of,
)
from .wave import Wave

__all__ = [
    "Pattern",
    "PatternCatalog",
    "build_catalog",
    "extract_pattern",
    "pattern_size",
    "Superposition",
    "Collapsed",
    "Contradiction",
    "WaveCell",
    "WaveError",
    "InvalidCellStateError",
    "candidates_of",
    "Wave",
]
