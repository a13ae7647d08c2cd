"""Core data types for Tessera.

Grid is a plain mutable container; tile vocabulary and sample maps are
frozen Pydantic models that use transformation methods for updates.

Usage:
    from tessera.core import Grid, Position, TileMap, TileData
"""

from .types import Position, TileValue
from .grid import Grid
from .tiles import TileIndex, TileData, TileSet
from .tile_map import TileMap

__all__ = [
    "Position",
    "TileValue",
    "Grid",
    "TileIndex",
    "TileData",
    "TileSet",
    "TileMap",
]
