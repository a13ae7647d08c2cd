"""
Cell states for the wave.

Every cell of the wave is in exactly one of three states:

    Superposition  - still undecided; holds the catalog indices of every
                     pattern that could still be centered here
    Collapsed      - decided; holds the center tile of the chosen pattern
    Contradiction  - no pattern fits; nothing more happens to this cell

A cell starts in Superposition with every pattern possible and moves once,
either to Collapsed or to Contradiction. It never goes back. While still in
Superposition its candidate set can only shrink.

These are plain frozen values. Code that needs to know the state matches on
the type rather than calling an accessor that assumes one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Union

from ...core.types import TileValue


class WaveError(Exception):
    """Base exception for wave errors."""

    pass


class InvalidCellStateError(WaveError):
    """A cell was used as if it were in a state it isn't in."""

    def __init__(self, message: str, position: tuple[int, int] | None = None):
        super().__init__(message)
        self.position = position


@dataclass(frozen=True)
class Superposition:
    """
    An undecided cell.

    The "entropy" of the cell is how many patterns are still possible.
    Lower entropy = more constrained = collapsed first.
    """
    candidates: frozenset[int]

    @property
    def entropy(self) -> int:
        return len(self.candidates)

    def without(self, removed: set[int] | frozenset[int]) -> Superposition:
        """Return a narrower superposition with some candidates removed."""
        if not removed:
            return self
        return Superposition(self.candidates - removed)


@dataclass(frozen=True)
class Collapsed(Generic[TileValue]):
    """
    A decided cell.

    value is the center tile of the chosen pattern; pattern is that
    pattern's catalog index (kept for inspection tooling).
    """
    value: TileValue
    pattern: int


@dataclass(frozen=True)
class Contradiction:
    """A cell for which every candidate pattern was ruled out."""
    pass


WaveCell = Union[Superposition, Collapsed, Contradiction]


def candidates_of(cell: WaveCell, position: tuple[int, int] | None = None) -> frozenset[int]:
    """
    Get the candidate set of a superposed cell.

    Raises:
        InvalidCellStateError: If the cell is not in superposition
    """
    if isinstance(cell, Superposition):
        return cell.candidates
    raise InvalidCellStateError(
        f"Cell {position} has no candidates: it is {type(cell).__name__}", position
    )
