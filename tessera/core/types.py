"""Foundational types for Tessera.

This module defines the small value types shared across the system:
- Position: Grid coordinates (x, y)
- TileValue: Type variable for whatever a grid cell holds
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import NamedTuple, TypeVar

# Anything a sample grid can hold. Must support equality and hashing,
# since patterns are matched and deduplicated by their tile contents.
TileValue = TypeVar("TileValue", bound=Hashable)


class Position(NamedTuple):
    """A position in a grid.

    Coordinates follow row-major screen orientation:
    - x increases to the right (column)
    - y increases downward (row)
    - (0, 0) is the top-left corner
    """

    x: int
    y: int

    def __add__(self, other: object) -> Position:
        """Add an (dx, dy) offset to this position."""
        if isinstance(other, tuple) and len(other) == 2:
            return Position(self.x + other[0], self.y + other[1])
        return NotImplemented

    def __sub__(self, other: object) -> Position:
        """Subtract an (dx, dy) offset from this position."""
        if isinstance(other, tuple) and len(other) == 2:
            return Position(self.x - other[0], self.y - other[1])
        return NotImplemented

    def in_bounds(self, width: int, height: int) -> bool:
        """Check if position is within grid bounds (0 to width-1, 0 to height-1)."""
        return 0 <= self.x < width and 0 <= self.y < height
