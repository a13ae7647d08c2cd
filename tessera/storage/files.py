"""File persistence for Tessera.

Sample maps (with their vocabulary and tileset) and finished outputs are
saved as YAML or JSON, picked by file suffix. Partially collapsed waves are
never written: there is no file format for superposition.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.tile_map import TileMap
from ..core.tiles import TileData
from ..generation.wfc import Collapsed, Contradiction, Superposition, Wave
from ..logging_config import log_storage

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


class StorageFormatError(StorageError):
    """File has an unknown format or content that doesn't parse."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------


class OutputDocument(BaseModel):
    """A finished synthesis output as written to disk.

    rows[y][x] is the tile name at (x, y), or None for an empty cell.
    Contradicted cells are None in rows and listed in contradictions.
    """

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    radius: int
    seed: int
    rows: tuple[tuple[str | None, ...], ...]
    contradictions: tuple[tuple[int, int], ...] = ()

    def to_tile_map(self, tiles: list[TileData] | tuple[TileData, ...]) -> TileMap:
        """Rebuild a tile map against a vocabulary, matching tiles by name."""
        by_name = {tile.name: i for i, tile in enumerate(tiles)}
        cells = []
        for row in self.rows:
            for name in row:
                if name is None:
                    cells.append(None)
                elif name in by_name:
                    cells.append(by_name[name])
                else:
                    raise StorageFormatError(f"Output uses unknown tile {name!r}")
        return TileMap(width=self.width, height=self.height, tiles=tuple(tiles), cells=tuple(cells))


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return "yaml"
    if suffix in JSON_SUFFIXES:
        return "json"
    raise StorageFormatError(
        f"Unsupported file type {suffix or '(none)'!r}; use .yaml, .yml or .json", path
    )


def _write_model(model: BaseModel, path: Path) -> None:
    fmt = _format_for(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "yaml":
        text = yaml.safe_dump(
            model.model_dump(mode="json"),
            sort_keys=False,
            default_flow_style=None,
            allow_unicode=True,
        )
    else:
        text = model.model_dump_json(indent=2)
    path.write_text(text, encoding="utf-8")


def _read_model(model_cls: type[BaseModel], path: Path) -> BaseModel:
    fmt = _format_for(path)
    text = path.read_text(encoding="utf-8")
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
            if not isinstance(data, dict):
                raise StorageFormatError(f"{path} does not contain a mapping", path)
            return model_cls.model_validate(data)
        return model_cls.model_validate_json(text)
    except yaml.YAMLError as e:
        raise StorageFormatError(f"Invalid YAML in {path}: {e}", path) from e
    except ValidationError as e:
        raise StorageFormatError(f"Invalid {model_cls.__name__} in {path}: {e}", path) from e


# -----------------------------------------------------------------------------
# Tile maps
# -----------------------------------------------------------------------------


def save_tile_map(tile_map: TileMap, path: Path | str) -> Path:
    """Write a sample map to YAML or JSON.

    Returns:
        The path written
    """
    path = Path(path)
    try:
        _write_model(tile_map, path)
    except StorageError:
        log_storage(logger, "save_tile_map", path, success=False)
        raise
    log_storage(
        logger,
        "save_tile_map",
        path,
        details=f"{tile_map.width}x{tile_map.height}, {len(tile_map.tiles)} tiles",
    )
    return path


def load_tile_map(path: Path | str) -> TileMap:
    """Read a sample map from YAML or JSON.

    Raises:
        FileNotFoundError: If the file doesn't exist
        StorageFormatError: If the file type or contents are invalid
    """
    path = Path(path)
    try:
        tile_map = _read_model(TileMap, path)
    except StorageError:
        log_storage(logger, "load_tile_map", path, success=False)
        raise
    log_storage(
        logger,
        "load_tile_map",
        path,
        details=f"{tile_map.width}x{tile_map.height}, {len(tile_map.tiles)} tiles",
    )
    return tile_map


# -----------------------------------------------------------------------------
# Outputs
# -----------------------------------------------------------------------------


def output_document(
    wave: Wave[int | None],
    tiles: list[TileData] | tuple[TileData, ...],
) -> OutputDocument:
    """Convert a finished wave over tile indices to its file form.

    Raises:
        StorageFormatError: If any cell is still in superposition
    """
    rows: list[tuple[str | None, ...]] = []
    contradictions: list[tuple[int, int]] = []
    for y, row in enumerate(wave.cells.rows()):
        names: list[str | None] = []
        for x, cell in enumerate(row):
            if isinstance(cell, Superposition):
                raise StorageFormatError(
                    f"Cell ({x}, {y}) is still undecided; only finished waves can be saved"
                )
            if isinstance(cell, Contradiction):
                contradictions.append((x, y))
                names.append(None)
            elif isinstance(cell, Collapsed):
                names.append(None if cell.value is None else tiles[cell.value].name)
        rows.append(tuple(names))

    return OutputDocument(
        width=wave.width,
        height=wave.height,
        radius=wave.radius,
        seed=wave.seed,
        rows=tuple(rows),
        contradictions=tuple(contradictions),
    )


def save_output(
    wave: Wave[int | None],
    tiles: list[TileData] | tuple[TileData, ...],
    path: Path | str,
) -> Path:
    """Write a finished wave's output to YAML or JSON.

    Raises:
        StorageFormatError: If the wave isn't finished or the file type is unknown
    """
    path = Path(path)
    document = output_document(wave, tiles)
    _write_model(document, path)
    log_storage(
        logger,
        "save_output",
        path,
        details=f"{document.width}x{document.height}, contradictions={len(document.contradictions)}",
    )
    return path


def load_output(path: Path | str) -> OutputDocument:
    """Read a saved output.

    Raises:
        FileNotFoundError: If the file doesn't exist
        StorageFormatError: If the file type or contents are invalid
    """
    path = Path(path)
    document = _read_model(OutputDocument, path)
    log_storage(logger, "load_output", path, details=f"{document.width}x{document.height}")
    return document
