"""
The wave: overlapping Wave Function Collapse over a pattern catalog.

The wave is a grid of cells, each in Superposition, Collapsed or
Contradiction (see cell.py). One step of the algorithm:

1. Observe: find the superposed cell with the fewest candidates
2. Collapse it to one pattern (random among its candidates)
3. Propagate: drop candidates from nearby cells that no longer fit
4. Repeat until no superposed cell remains

Propagation is single-hop. Only cells inside the pattern window around the
collapsed cell are re-checked, and a cell losing candidates does not in
turn re-check its own neighbors. That keeps each step cheap but means some
contradictions are found later than full arc consistency would find them.

Contradictions are not errors here. A cell whose candidates run out
becomes Contradiction when it is observed, and the run carries on. Callers
that want a clean result inspect the finished grid and re-run (see
synthesis.py).
"""

from __future__ import annotations

import logging
import random
from typing import Generic

from ...core.grid import Grid
from ...core.types import Position, TileValue
from ...logging_config import log_step
from .cell import (
    Collapsed,
    Contradiction,
    InvalidCellStateError,
    Superposition,
    WaveCell,
)
from .pattern import Pattern, PatternCatalog, build_catalog

logger = logging.getLogger(__name__)


class Wave(Generic[TileValue]):
    """
    The output grid being synthesized, plus the algorithm that fills it.

    Usage:
        wave = Wave(sample, radius=2, width=32, height=32, seed=42)
        while wave.step() is not None:
            ...  # redraw, yield to an event loop, etc.

    Or in one call:
        wave.collapse_full()

    Two waves built from the same sample, radius, size and seed make exactly
    the same decisions.
    """

    def __init__(self, sample: Grid[TileValue], radius: int, width: int, height: int, seed: int):
        """
        Build the catalog from a sample and start every cell in full superposition.

        Args:
            sample: Grid of tile values to learn patterns from
            radius: Pattern radius (window is 2 * radius - 1 wide), at least 1
            width: Output width in cells, at least 1
            height: Output height in cells, at least 1
            seed: Seed for the collapse random number generator

        Raises:
            ValueError: On a bad radius or size, or if the sample is too
                small to contain a single pattern
        """
        self._setup(build_catalog(sample, radius), width, height, seed)

    @classmethod
    def from_catalog(cls, catalog: PatternCatalog[TileValue], width: int, height: int, seed: int) -> Wave[TileValue]:
        """Build a wave over an existing catalog without re-extracting it."""
        wave = cls.__new__(cls)
        wave._setup(catalog, width, height, seed)
        return wave

    def _setup(self, catalog: PatternCatalog[TileValue], width: int, height: int, seed: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Output size must be at least 1x1, got {width}x{height}")
        if len(catalog) == 0:
            raise ValueError(
                f"Sample holds no radius {catalog.radius} patterns; it must be at least "
                f"{2 * catalog.radius - 1} cells in each direction"
            )

        self._catalog = catalog
        self._radius = catalog.radius
        self._seed = seed
        self._rng = random.Random(seed)
        self._cells: Grid[WaveCell] = Grid.filled(
            width, height, Superposition(catalog.all_indices())
        )

        self.step_count = 0
        self.draws = 0  # Random choices made so far

        # Track the last collapsed cell (for visualization/debugging)
        self.last_collapsed: Position | None = None

        # Track cells narrowed in last propagation (for visualization/debugging)
        self.last_propagated: set[Position] = set()

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def cells(self) -> Grid[WaveCell]:
        """The cell grid. Read it, don't write it."""
        return self._cells

    @property
    def catalog(self) -> PatternCatalog[TileValue]:
        return self._catalog

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def width(self) -> int:
        return self._cells.width

    @property
    def height(self) -> int:
        return self._cells.height

    def cell(self, x: int, y: int) -> WaveCell:
        return self._cells.at(x, y)

    # -------------------------------------------------------------------------
    # Algorithm
    # -------------------------------------------------------------------------

    def observe(self) -> Position | None:
        """
        Find the superposed cell with the lowest entropy.

        Cells are scanned row by row and the first cell with the minimum
        candidate count wins ties. Returns None when no cell is superposed,
        which is the only way a run ends.
        """
        best: Position | None = None
        best_entropy = 0

        for pos, cell in self._cells.items():
            if not isinstance(cell, Superposition):
                continue
            if best is None or cell.entropy < best_entropy:
                best = pos
                best_entropy = cell.entropy
                if best_entropy == 0:
                    break  # Nothing can beat an empty set

        return best

    def collapse(self, pos: tuple[int, int]) -> WaveCell:
        """
        Decide a superposed cell.

        An empty candidate set becomes Contradiction. A single candidate is
        taken as is, without touching the random generator. Otherwise one
        candidate is picked uniformly at random.

        Returns the new cell.

        Raises:
            InvalidCellStateError: If the cell is not in superposition
        """
        pos = Position(*pos)
        cell = self._cells.at(pos.x, pos.y)
        if not isinstance(cell, Superposition):
            raise InvalidCellStateError(
                f"Cannot collapse cell {tuple(pos)}: it is already {type(cell).__name__}",
                pos,
            )

        new_cell: WaveCell
        if cell.entropy == 0:
            new_cell = Contradiction()
        elif cell.entropy == 1:
            (chosen,) = cell.candidates
            new_cell = Collapsed(self._catalog[chosen].center, chosen)
        else:
            # Sorted so the draw depends only on which indices remain
            chosen = self._rng.choice(sorted(cell.candidates))
            self.draws += 1
            new_cell = Collapsed(self._catalog[chosen].center, chosen)

        self._cells.set(pos.x, pos.y, new_cell)
        return new_cell

    def compatible(self, pos: tuple[int, int], pattern: Pattern[TileValue]) -> bool:
        """
        Check if a pattern centered at pos agrees with every collapsed cell it covers.

        Superposed and contradicted cells don't constrain anything, and
        parts of the pattern that hang off the grid are ignored.
        """
        cx, cy = pos
        for dx, dy, tile in pattern.offsets():
            x = cx + dx
            y = cy + dy
            if not self._cells.in_bounds(x, y):
                continue
            cell = self._cells.at(x, y)
            if isinstance(cell, Collapsed) and cell.value != tile:
                return False
        return True

    def propagate(self, pos: tuple[int, int]) -> set[Position]:
        """
        Re-check the superposed cells in the window around pos.

        Candidates whose pattern no longer fits the collapsed cells around
        them are removed. Only the window around pos is visited.

        Returns the positions whose candidate sets shrank.
        """
        narrowed: set[Position] = set()

        for neighbor in self._cells.neighbors(pos, self._radius):
            cell = self._cells.at(neighbor.x, neighbor.y)
            if not isinstance(cell, Superposition):
                continue

            # Work out removals first, then replace the cell once
            removed = {
                index
                for index in cell.candidates
                if not self.compatible(neighbor, self._catalog[index])
            }
            if removed:
                self._cells.set(neighbor.x, neighbor.y, cell.without(removed))
                narrowed.add(neighbor)

        return narrowed

    def constrain(self, pos: tuple[int, int], allowed: set[int] | frozenset[int]) -> bool:
        """
        Narrow a superposed cell to the given catalog indices.

        Lets a caller pin parts of the output before running. Candidates can
        only be removed, never added.

        Returns True if the cell lost candidates.

        Raises:
            InvalidCellStateError: If the cell is not in superposition
        """
        pos = Position(*pos)
        cell = self._cells.at(pos.x, pos.y)
        if not isinstance(cell, Superposition):
            raise InvalidCellStateError(
                f"Cannot constrain cell {tuple(pos)}: it is already {type(cell).__name__}",
                pos,
            )
        removed = cell.candidates - frozenset(allowed)
        if not removed:
            return False
        self._cells.set(pos.x, pos.y, cell.without(removed))
        return True

    def step(self) -> Position | None:
        """
        Run one observe / collapse / propagate round.

        Returns the position that was decided, or None if nothing was left
        to decide (in which case nothing happens).
        """
        self.last_propagated = set()

        pos = self.observe()
        if pos is None:
            return None

        new_cell = self.collapse(pos)
        self.last_propagated = self.propagate(pos)
        self.last_collapsed = pos
        self.step_count += 1

        if logger.isEnabledFor(logging.DEBUG):
            if isinstance(new_cell, Collapsed):
                outcome = f"COLLAPSED pattern={new_cell.pattern} value={new_cell.value!r}"
            else:
                outcome = "CONTRADICTION"
            log_step(
                logger,
                self.step_count,
                pos,
                outcome,
                details=f"narrowed={len(self.last_propagated)}",
            )

        return pos

    def collapse_full(self) -> int:
        """
        Step until every cell is decided.

        Each step takes one superposed cell out of superposition for good,
        so this finishes within width * height steps.

        Returns the number of steps taken.
        """
        steps = 0
        while self.step() is not None:
            steps += 1

        contradictions = len(self.contradictions())
        if contradictions:
            logger.info(
                f"Wave seed={self._seed} finished with {contradictions} contradiction(s) "
                f"after {self.step_count} steps"
            )
        else:
            logger.debug(f"Wave seed={self._seed} finished cleanly after {self.step_count} steps")
        return steps

    def reset(self, seed: int | None = None) -> None:
        """Return every cell to full superposition and reseed."""
        self._setup(
            self._catalog,
            self.width,
            self.height,
            self._seed if seed is None else seed,
        )

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def is_complete(self) -> bool:
        """Check if no cell is left in superposition."""
        return not any(isinstance(cell, Superposition) for cell in self._cells)

    def decided_count(self) -> int:
        """Number of cells that are collapsed or contradicted."""
        return sum(1 for cell in self._cells if not isinstance(cell, Superposition))

    def contradictions(self) -> list[Position]:
        """Positions of every contradicted cell, row-major."""
        return [pos for pos, cell in self._cells.items() if isinstance(cell, Contradiction)]

    def has_contradiction(self) -> bool:
        return any(isinstance(cell, Contradiction) for cell in self._cells)

    def output_grid(self) -> Grid[TileValue | None]:
        """
        The synthesized tiles.

        Collapsed cells give their value; superposed and contradicted cells
        give None.
        """
        return self._cells.map(
            lambda cell: cell.value if isinstance(cell, Collapsed) else None
        )
