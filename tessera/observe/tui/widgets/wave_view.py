"""Wave view widget for Tessera TUI.

Renders every cell of a wave: tiles where collapsed, an error glyph where
contradicted, and a placeholder (or entropy digit) where still undecided.
"""

from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from ....core.tiles import TileData
from ....generation.wfc import Wave
from ...render import render_wave


class WaveView(Widget):
    """Widget that renders a wave's cell grid.

    The most recently collapsed cell is highlighted so stepping is easy to
    follow.
    """

    show_entropy: reactive[bool] = reactive(False)

    def __init__(
        self,
        wave: Wave,
        tiles: Sequence[TileData],
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        """Initialize WaveView.

        Args:
            wave: Wave to display (read only)
            tiles: Vocabulary used to draw collapsed values
            name: Widget name
            id: Widget ID
            classes: CSS classes
        """
        super().__init__(name=name, id=id, classes=classes)
        self._wave = wave
        self._tiles = tiles

    def render(self) -> Text:
        """Render the wave grid."""
        highlight = set()
        if self._wave.last_collapsed is not None:
            highlight.add(tuple(self._wave.last_collapsed))
        return render_wave(
            self._wave.cells,
            self._tiles,
            show_entropy=self.show_entropy,
            highlight=highlight,
        )
