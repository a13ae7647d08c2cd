"""
Pattern extraction for overlapping Wave Function Collapse.

A Pattern is a square window cut out of the sample grid around one cell.
With radius r the window is (2r - 1) cells wide, so radius 1 is a single
cell, radius 2 is a 3x3 block, radius 3 is 5x5 and so on.

The catalog is every distinct pattern in the sample. Its indices are how
the wave refers to patterns, so the order has to be reproducible: patterns
are numbered in the order they are first seen while scanning the sample
row by row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Iterator

from ...core.grid import Grid
from ...core.types import TileValue
from ...logging_config import log_catalog

logger = logging.getLogger(__name__)


def pattern_size(radius: int) -> int:
    """Side length of the window for a radius."""
    if radius < 1:
        raise ValueError(f"Pattern radius must be at least 1, got {radius}")
    return 2 * radius - 1


def window_fits(pos: tuple[int, int], radius: int, grid: Grid) -> bool:
    """Check if the window around pos lies entirely inside the grid."""
    reach = radius - 1
    x, y = pos
    return (
        x - reach >= 0
        and y - reach >= 0
        and x + reach < grid.width
        and y + reach < grid.height
    )


@dataclass(frozen=True, eq=False)
class Pattern(Generic[TileValue]):
    """
    A (2r - 1) x (2r - 1) neighborhood of tile values.

    Patterns compare by content: two windows with the same tiles are the
    same pattern wherever they came from in the sample.
    """
    radius: int
    tiles: Grid[TileValue]
    _key: tuple = field(init=False, repr=False)

    def __post_init__(self):
        size = pattern_size(self.radius)
        if self.tiles.width != size or self.tiles.height != size:
            raise ValueError(
                f"Pattern of radius {self.radius} needs {size}x{size} tiles, "
                f"got {self.tiles.width}x{self.tiles.height}"
            )
        # Grid is mutable; keep our own copy so the key can't go stale
        tiles = self.tiles.copy()
        object.__setattr__(self, "tiles", tiles)
        object.__setattr__(self, "_key", (self.radius, tuple(tiles)))

    @property
    def size(self) -> int:
        return self.tiles.width

    @property
    def center(self) -> TileValue:
        """The tile the pattern was extracted around."""
        return self.tiles.at(self.radius - 1, self.radius - 1)

    def offsets(self) -> Iterator[tuple[int, int, TileValue]]:
        """
        Yield (dx, dy, tile) for every cell, relative to the center.

        dx and dy run from -(r - 1) to r - 1.
        """
        reach = self.radius - 1
        for pos, tile in self.tiles.items():
            yield pos.x - reach, pos.y - reach, tile

    def tile_at_offset(self, dx: int, dy: int) -> TileValue:
        """Get the tile at an offset from the center."""
        reach = self.radius - 1
        return self.tiles.at(dx + reach, dy + reach)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return str(self.tiles)


def extract_pattern(
    pos: tuple[int, int], radius: int, sample: Grid[TileValue]
) -> Pattern[TileValue] | None:
    """
    Cut the pattern centered at pos out of the sample.

    Returns None when the window would hang off the edge of the sample.
    That is the normal case for border cells, not an error.

    Raises:
        ValueError: If radius is less than 1
    """
    size = pattern_size(radius)

    if not window_fits(pos, radius, sample):
        return None

    reach = radius - 1
    x0 = pos[0] - reach
    y0 = pos[1] - reach
    tiles = Grid.generate(size, size, lambda x, y: sample.at(x0 + x, y0 + y))
    return Pattern(radius=radius, tiles=tiles)


class PatternCatalog(Generic[TileValue]):
    """
    The deduplicated, indexed list of patterns found in one sample.

    Index i of the catalog is the identity the wave uses for a pattern.
    """

    def __init__(self, radius: int, patterns: list[Pattern[TileValue]]):
        pattern_size(radius)
        for pattern in patterns:
            if pattern.radius != radius:
                raise ValueError(
                    f"Catalog of radius {radius} can't hold a radius {pattern.radius} pattern"
                )

        self._radius = radius
        self._patterns: tuple[Pattern[TileValue], ...] = tuple(patterns)
        self._index: dict[Pattern[TileValue], int] = {}
        for i, pattern in enumerate(self._patterns):
            if pattern in self._index:
                raise ValueError(f"Pattern {i} duplicates pattern {self._index[pattern]}")
            self._index[pattern] = i

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def patterns(self) -> tuple[Pattern[TileValue], ...]:
        return self._patterns

    def index_of(self, pattern: Pattern[TileValue]) -> int:
        """
        Find a pattern's catalog index.

        Raises:
            KeyError: If the pattern isn't in the catalog
        """
        return self._index[pattern]

    def centers(self) -> list[TileValue]:
        """Center tile of every pattern, in catalog order."""
        return [pattern.center for pattern in self._patterns]

    def all_indices(self) -> frozenset[int]:
        """Every catalog index - the starting superposition."""
        return frozenset(range(len(self._patterns)))

    def __getitem__(self, index: int) -> Pattern[TileValue]:
        return self._patterns[index]

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern[TileValue]]:
        return iter(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._index

    def __eq__(self, other: object) -> bool:
        """Catalogs are equal if they hold the same patterns in the same order."""
        if not isinstance(other, PatternCatalog):
            return NotImplemented
        return self._radius == other._radius and self._patterns == other._patterns

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PatternCatalog(radius={self._radius}, patterns={len(self._patterns)})"


def build_catalog(sample: Grid[TileValue], radius: int) -> PatternCatalog[TileValue]:
    """
    Extract every pattern in the sample and deduplicate them.

    Positions are scanned row by row (y outer, x inner). A pattern gets the
    next free index the first time it is seen; later copies are dropped.
    Building twice from the same sample gives the same catalog in the same
    order.

    Raises:
        ValueError: If radius is less than 1
    """
    pattern_size(radius)

    seen: dict[Pattern[TileValue], None] = {}
    extracted = 0
    for pos in sample.positions():
        pattern = extract_pattern(pos, radius, sample)
        if pattern is None:
            continue
        extracted += 1
        seen.setdefault(pattern, None)

    catalog = PatternCatalog(radius, list(seen))
    log_catalog(
        logger,
        radius,
        (sample.width, sample.height),
        len(catalog),
        details=f"extracted={extracted}",
    )
    return catalog

