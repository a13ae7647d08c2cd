"""Tile vocabulary for Tessera.

A sample map does not store tiles directly: each cell holds an index into a
list of TileData entries. A TileData names its tile, points at up to two
sprites on a tileset sheet (a base layer and an optional top layer drawn
over it), and carries the symbol/color used by the terminal renderer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TileIndex(BaseModel):
    """Column/row of a sprite on a tileset sheet."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0)
    y: int = Field(ge=0)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class TileData(BaseModel):
    """One entry of a tile vocabulary.

    Two TileData with the same fields are the same tile, which is what lets
    patterns built from them deduplicate.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    debug_name: str = ""
    top: TileIndex | None = None
    base: TileIndex | None = None
    symbol: str = "#"
    color: str = "white"

    @field_validator("symbol")
    @classmethod
    def _single_char_symbol(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"Tile symbol must be a single character, got {value!r}")
        return value

    @property
    def label(self) -> str:
        """Name for display, preferring the debug name."""
        return self.debug_name or self.name

    def __str__(self) -> str:
        top = str(self.top) if self.top else "()"
        base = str(self.base) if self.base else "()"
        return f"[{top}; {base}]"


class TileSet(BaseModel):
    """A sprite sheet laid out as a regular grid of equally sized tiles."""

    model_config = ConfigDict(frozen=True)

    texture: str
    columns: int = Field(gt=0)
    rows: int = Field(gt=0)
    tile_width: int = Field(default=16, gt=0)
    tile_height: int = Field(default=16, gt=0)

    @property
    def size(self) -> tuple[int, int]:
        """Sheet size in pixels."""
        return (self.columns * self.tile_width, self.rows * self.tile_height)

    def contains(self, index: TileIndex) -> bool:
        """Check if a sprite index lies on this sheet."""
        return index.x < self.columns and index.y < self.rows

    def uv(self, index: TileIndex) -> tuple[int, int, int, int]:
        """Get the pixel rectangle (left, top, right, bottom) of a sprite.

        Raises:
            ValueError: If the index is off the sheet
        """
        if not self.contains(index):
            raise ValueError(
                f"Tile index {index} outside {self.columns}x{self.rows} tileset"
            )
        left = index.x * self.tile_width
        top = index.y * self.tile_height
        return (left, top, left + self.tile_width, top + self.tile_height)
