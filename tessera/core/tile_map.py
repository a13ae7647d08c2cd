"""Sample tile maps for Tessera.

A TileMap is the thing a user paints and saves: a width x height grid of
optional indices into a tile vocabulary, plus the tileset the vocabulary
draws from. Wave Function Collapse learns its patterns from tile_map.to_grid().
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .grid import Grid
from .tiles import TileData, TileSet


class TileMap(BaseModel):
    """A sample map of tile indices.

    Cells are stored row-major; None means the cell is empty. Maps are
    immutable - set() and resize() return new maps.
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0)
    height: int = Field(ge=0)
    tiles: tuple[TileData, ...] = ()
    cells: tuple[int | None, ...] = ()
    tile_set: TileSet | None = None

    @model_validator(mode="after")
    def _check_cells(self) -> TileMap:
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"Tile map of {self.width}x{self.height} needs "
                f"{self.width * self.height} cells, got {len(self.cells)}"
            )
        for i, index in enumerate(self.cells):
            if index is not None and not 0 <= index < len(self.tiles):
                raise ValueError(
                    f"Cell {i} refers to tile {index}, vocabulary has {len(self.tiles)} tiles"
                )
        if self.tile_set is not None:
            for tile in self.tiles:
                for sprite in (tile.base, tile.top):
                    if sprite is not None and not self.tile_set.contains(sprite):
                        raise ValueError(f"Tile {tile.name!r} uses sprite {sprite} off the tileset")
        return self

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        tiles: list[TileData] | tuple[TileData, ...],
        fill: int | None = None,
        tile_set: TileSet | None = None,
    ) -> TileMap:
        """Create a map with every cell set to fill."""
        return cls(
            width=width,
            height=height,
            tiles=tuple(tiles),
            cells=(fill,) * (width * height),
            tile_set=tile_set,
        )

    @classmethod
    def from_grid(
        cls,
        grid: Grid[int | None],
        tiles: list[TileData] | tuple[TileData, ...],
        tile_set: TileSet | None = None,
    ) -> TileMap:
        """Create a map from a grid of tile indices."""
        return cls(
            width=grid.width,
            height=grid.height,
            tiles=tuple(tiles),
            cells=tuple(grid),
            tile_set=tile_set,
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> int | None:
        """Get the tile index at (x, y)."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Position ({x}, {y}) outside {self.width}x{self.height} map")
        return self.cells[y * self.width + x]

    def tile(self, index: int | None) -> TileData | None:
        """Look up a vocabulary entry, passing None through."""
        if index is None:
            return None
        return self.tiles[index]

    def tile_at(self, x: int, y: int) -> TileData | None:
        """Get the TileData painted at (x, y), if any."""
        return self.tile(self.at(x, y))

    def set(self, x: int, y: int, index: int | None) -> TileMap:
        """Return a new map with (x, y) painted with a tile index."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Position ({x}, {y}) outside {self.width}x{self.height} map")
        if index is not None and not 0 <= index < len(self.tiles):
            raise ValueError(f"Tile {index} not in vocabulary of {len(self.tiles)} tiles")
        # model_copy skips validation, so bounds are checked above
        cells = list(self.cells)
        cells[y * self.width + x] = index
        return self.model_copy(update={"cells": tuple(cells)})

    def resize(self, width: int, height: int, fill: int | None = None) -> TileMap:
        """Return a new map of a different size.

        The overlapping top-left region is kept; new cells get fill.
        """
        cells = tuple(
            self.at(x, y) if self.in_bounds(x, y) else fill
            for y in range(height)
            for x in range(width)
        )
        return TileMap(
            width=width,
            height=height,
            tiles=self.tiles,
            cells=cells,
            tile_set=self.tile_set,
        )

    def to_grid(self) -> Grid[int | None]:
        """The sample grid WFC learns from."""
        return Grid(self.width, self.height, self.cells)

    def index_of(self, name: str) -> int:
        """Find a vocabulary index by tile name.

        Raises:
            KeyError: If no tile has that name
        """
        for i, tile in enumerate(self.tiles):
            if tile.name == name:
                return i
        raise KeyError(name)
