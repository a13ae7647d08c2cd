"""
Generic fixed-size 2D grid.

A Grid stores width * height values in a flat row-major list. It is the
container used for sample maps, extracted patterns and the wave itself.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

from .types import Position

T = TypeVar("T")
U = TypeVar("U")


class Grid(Generic[T]):
    """
    A width x height grid of values in row-major order.

    Access is bounds-checked: reading or writing outside the grid raises
    IndexError instead of wrapping around into another row.
    """

    __slots__ = ("_width", "_height", "_cells")

    def __init__(self, width: int, height: int, cells: Iterable[T]):
        """
        Create a grid from a flat row-major sequence of values.

        Args:
            width: Number of columns
            height: Number of rows
            cells: Exactly width * height values, row by row

        Raises:
            ValueError: If a dimension is negative or the cell count is wrong
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        cells = list(cells)
        if len(cells) != width * height:
            raise ValueError(
                f"Grid of {width}x{height} needs {width * height} cells, got {len(cells)}"
            )

        self._width = width
        self._height = height
        self._cells = cells

    @classmethod
    def filled(cls, width: int, height: int, value: T) -> Grid[T]:
        """Create a grid with every cell set to the same value."""
        return cls(width, height, [value] * (width * height))

    @classmethod
    def generate(cls, width: int, height: int, factory: Callable[[int, int], T]) -> Grid[T]:
        """Create a grid by calling factory(x, y) for every position."""
        return cls(
            width,
            height,
            [factory(x, y) for y in range(height) for x in range(width)],
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[T]]) -> Grid[T]:
        """
        Create a grid from a list of rows, indexed as rows[y][x].

        Raises:
            ValueError: If the rows are ragged
        """
        rows = [list(row) for row in rows]
        height = len(rows)
        width = len(rows[0]) if rows else 0
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
        return cls(width, height, [value for row in rows for value in row])

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) lies inside the grid."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"Position ({x}, {y}) outside {self._width}x{self._height} grid")
        return y * self._width + x

    def at(self, x: int, y: int) -> T:
        """Get the value at (x, y)."""
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, value: T) -> None:
        """Replace the value at (x, y)."""
        self._cells[self._index(x, y)] = value

    def __getitem__(self, pos: tuple[int, int]) -> T:
        return self.at(pos[0], pos[1])

    def __setitem__(self, pos: tuple[int, int], value: T) -> None:
        self.set(pos[0], pos[1], value)

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield Position(x, y)

    def items(self) -> Iterator[tuple[Position, T]]:
        """Yield (position, value) pairs in row-major order."""
        for i, value in enumerate(self._cells):
            yield Position(i % self._width, i // self._width), value

    def rows(self) -> list[list[T]]:
        """Return the contents as a list of rows, indexed as rows[y][x]."""
        return [
            self._cells[y * self._width:(y + 1) * self._width]
            for y in range(self._height)
        ]

    def neighbors(self, pos: tuple[int, int], radius: int) -> Iterator[Position]:
        """
        Yield in-bounds positions in the window around pos.

        The window is the (2 * radius - 1) square centered on pos, so
        radius 1 is just the center and yields nothing, radius 2 is the
        3x3 ring and so on. The center itself is never yielded. Positions
        come out in row-major order.

        Raises:
            ValueError: If radius is less than 1
        """
        if radius < 1:
            raise ValueError(f"Neighbor radius must be at least 1, got {radius}")

        cx, cy = pos
        reach = radius - 1
        for y in range(max(0, cy - reach), min(self._height, cy + reach + 1)):
            for x in range(max(0, cx - reach), min(self._width, cx + reach + 1)):
                if x == cx and y == cy:
                    continue
                yield Position(x, y)

    def map(self, func: Callable[[T], U]) -> Grid[U]:
        """Return a new grid with func applied to every value."""
        return Grid(self._width, self._height, [func(value) for value in self._cells])

    def copy(self) -> Grid[T]:
        """Shallow copy of the grid."""
        return Grid(self._width, self._height, self._cells)

    def __iter__(self) -> Iterator[T]:
        """Iterate over values in row-major order."""
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        """Two grids are equal if they have the same shape and contents."""
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._cells == other._cells
        )

    # Grids are mutable, so they are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"

    def __str__(self) -> str:
        return "\n".join(" ".join(str(value) for value in row) for row in self.rows())
