"""Pattern viewer for Tessera TUI.

A modal screen that pages through the catalog one pattern at a time.
"""

from __future__ import annotations

from typing import Sequence

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from ....core.tiles import TileData
from ....generation.wfc import PatternCatalog
from ...render import render_pattern


class PatternViewer(ModalScreen[None]):
    """Modal screen showing one catalog pattern with previous/next buttons."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("left", "previous", "Previous"),
        ("right", "next", "Next"),
    ]

    def __init__(self, catalog: PatternCatalog, tiles: Sequence[TileData]):
        if len(catalog) == 0:
            raise ValueError("There must be at least one pattern to view")
        super().__init__()
        self._catalog = catalog
        self._tiles = tiles
        self.current = 0

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog", id="pattern-dialog"):
            yield Static("Pattern Viewer", classes="dialog-title")
            yield Static(self._label(), id="pattern-label")
            yield Static(self._body(), id="pattern-body")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Previous", id="previous-btn")
                yield Button("Next", id="next-btn")
                yield Button("Close", variant="primary", id="close-btn")

    def _label(self) -> str:
        return f"pattern: {self.current + 1}/{len(self._catalog)}"

    def _body(self):
        return render_pattern(self._catalog[self.current], self._tiles)

    def _show(self) -> None:
        self.query_one("#pattern-label", Static).update(self._label())
        self.query_one("#pattern-body", Static).update(self._body())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "previous-btn":
            self.action_previous()
        elif event.button.id == "next-btn":
            self.action_next()
        else:
            self.dismiss(None)

    def action_previous(self) -> None:
        if self.current > 0:
            self.current -= 1
            self._show()

    def action_next(self) -> None:
        if self.current < len(self._catalog) - 1:
            self.current += 1
            self._show()

    def action_close(self) -> None:
        self.dismiss(None)
