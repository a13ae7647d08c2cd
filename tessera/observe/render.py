"""Terminal rendering of tiles, patterns and waves.

Maps each cell to a (symbol, color) pair for rich/Textual. Collapsed cells
show their tile; contradicted cells show a red error glyph; undecided cells
show a dim placeholder, or their entropy when asked. Rendering never fails
on a half-finished wave.
"""

from __future__ import annotations

from typing import Sequence

from rich.text import Text

from ..core.grid import Grid
from ..core.tiles import TileData
from ..generation.wfc import Collapsed, Contradiction, Pattern, Superposition, WaveCell

CONTRADICTION_RENDER: tuple[str, str] = ("X", "bold white on red")
SUPERPOSITION_RENDER: tuple[str, str] = ("?", "bright_black")
EMPTY_RENDER: tuple[str, str] = (" ", "default")
UNKNOWN_RENDER: tuple[str, str] = ("?", "magenta")


def render_tile(value: object, tiles: Sequence[TileData]) -> tuple[str, str]:
    """Get (symbol, color) for a tile value.

    Values are indices into tiles; None is an empty cell. Anything else
    (values from a sample that isn't a tile map) is drawn by its first
    character.
    """
    if value is None:
        return EMPTY_RENDER
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < len(tiles):
        tile = tiles[value]
        return (tile.symbol, tile.color)
    text = str(value)
    return (text[0], "white") if text else UNKNOWN_RENDER


def render_cell(
    cell: WaveCell,
    tiles: Sequence[TileData],
    show_entropy: bool = False,
) -> tuple[str, str]:
    """Get (symbol, color) for a wave cell."""
    if isinstance(cell, Collapsed):
        return render_tile(cell.value, tiles)
    if isinstance(cell, Contradiction):
        return CONTRADICTION_RENDER
    if isinstance(cell, Superposition):
        if show_entropy:
            # Single digit; 9 means "9 or more"
            return (str(min(cell.entropy, 9)), "bright_black")
        return SUPERPOSITION_RENDER
    return UNKNOWN_RENDER


def _join_lines(lines: list[Text]) -> Text:
    result = Text()
    for i, line in enumerate(lines):
        result.append(line)
        if i < len(lines) - 1:
            result.append("\n")
    return result


def render_wave(
    cells: Grid[WaveCell],
    tiles: Sequence[TileData],
    show_entropy: bool = False,
    highlight: set[tuple[int, int]] | None = None,
) -> Text:
    """Render a whole wave grid, top row first.

    Positions in highlight are drawn in reverse video.
    """
    highlight = highlight or set()
    lines: list[Text] = []
    for y, row in enumerate(cells.rows()):
        line = Text()
        for x, cell in enumerate(row):
            symbol, color = render_cell(cell, tiles, show_entropy)
            if (x, y) in highlight:
                line.append(symbol, style=f"reverse {color}")
            else:
                line.append(symbol, style=color)
            line.append(" ")  # Spacing between cells
        lines.append(line)
    return _join_lines(lines)


def render_values(
    grid: Grid,
    tiles: Sequence[TileData],
    cursor: tuple[int, int] | None = None,
) -> Text:
    """Render a grid of tile values (a sample map or a pattern)."""
    lines: list[Text] = []
    for y, row in enumerate(grid.rows()):
        line = Text()
        for x, value in enumerate(row):
            symbol, color = render_tile(value, tiles)
            if cursor == (x, y):
                line.append(symbol if symbol != " " else "_", style=f"reverse {color}")
            else:
                line.append(symbol, style=color)
            line.append(" ")
        lines.append(line)
    return _join_lines(lines)


def render_pattern(pattern: Pattern, tiles: Sequence[TileData]) -> Text:
    """Render a pattern with its center highlighted."""
    center = (pattern.radius - 1, pattern.radius - 1)
    return render_values(pattern.tiles, tiles, cursor=center)
