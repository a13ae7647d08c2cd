"""Sample editor widget for Tessera TUI.

Shows a sample tile map with a cursor that can be moved and painted with.
"""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from ....core.tile_map import TileMap
from ...render import render_values


class SampleEditor(Widget):
    """Widget for painting tiles into a sample map."""

    cursor_x: reactive[int] = reactive(0)
    cursor_y: reactive[int] = reactive(0)
    selected: reactive[int | None] = reactive(None)

    def __init__(
        self,
        tile_map: TileMap,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        """Initialize SampleEditor.

        Args:
            tile_map: Map to edit
            name: Widget name
            id: Widget ID
            classes: CSS classes
        """
        super().__init__(name=name, id=id, classes=classes)
        self.tile_map = tile_map

    def move_cursor(self, dx: int, dy: int) -> None:
        """Move the cursor by delta cells, staying on the map."""
        self.cursor_x = max(0, min(self.tile_map.width - 1, self.cursor_x + dx))
        self.cursor_y = max(0, min(self.tile_map.height - 1, self.cursor_y + dy))
        self.refresh()

    def choose_tile(self, index: int | None) -> None:
        """Choose the tile to paint with (None erases)."""
        if index is not None and not 0 <= index < len(self.tile_map.tiles):
            return
        self.selected = index

    def paint(self) -> None:
        """Paint the selected tile at the cursor."""
        if self.tile_map.width == 0 or self.tile_map.height == 0:
            return
        self.tile_map = self.tile_map.set(self.cursor_x, self.cursor_y, self.selected)
        self.refresh()

    def resize_map(self, dw: int, dh: int) -> None:
        """Grow or shrink the map, keeping at least one cell."""
        width = max(1, self.tile_map.width + dw)
        height = max(1, self.tile_map.height + dh)
        self.tile_map = self.tile_map.resize(width, height)
        self.cursor_x = min(self.cursor_x, width - 1)
        self.cursor_y = min(self.cursor_y, height - 1)
        self.refresh()

    def render(self) -> Text:
        """Render the map with the cursor highlighted."""
        text = render_values(
            self.tile_map.to_grid(),
            self.tile_map.tiles,
            cursor=(self.cursor_x, self.cursor_y),
        )
        text.append("\n\n")
        for i, tile in enumerate(self.tile_map.tiles[:9]):
            marker = ">" if self.selected == i else " "
            text.append(f"{marker}{i + 1} ")
            text.append(tile.symbol, style=tile.color)
            text.append(f" {tile.label}\n")
        marker = ">" if self.selected is None else " "
        text.append(f"{marker}0   (erase)")
        return text
