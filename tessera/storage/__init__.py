"""Persistence for sample maps and synthesis outputs."""

from .files import (
    StorageError,
    StorageFormatError,
    OutputDocument,
    save_tile_map,
    load_tile_map,
    output_document,
    save_output,
    load_output,
)

__all__ = [
    "StorageError",
    "StorageFormatError",
    "OutputDocument",
    "save_tile_map",
    "load_tile_map",
    "output_document",
    "save_output",
    "load_output",
]
