"""TUI applications for Tessera.

WaveViewerTUI steps a wave interactively over a sample map.
SampleEditorTUI paints and saves sample maps.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Static

from ...core.tile_map import TileMap
from ...generation.synthesis import derive_seed
from ...generation.wfc import Wave, build_catalog
from ...logging_config import log_viewer_cmd
from ...settings import GenerationConfig
from ...storage import StorageError, save_output, save_tile_map
from ..render import render_values
from .widgets import PatternViewer, SampleEditor, WaveHeader, WaveView

logger = logging.getLogger(__name__)


class WaveViewerTUI(App):
    """Interactive wave viewer.

    Shows the sample next to the output being synthesized. The wave can be
    stepped one cell at a time, auto-run on a timer (yielding to the UI
    between steps), or finished in one go.
    """

    CSS_PATH = "theme.tcss"
    TITLE = "Tessera"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("space", "step", "Step", show=True),
        Binding("a", "toggle_auto", "Auto"),
        Binding("f", "finish", "Finish"),
        Binding("r", "reset", "Reseed"),
        Binding("p", "show_patterns", "Patterns"),
        Binding("e", "toggle_entropy", "Entropy"),
        Binding("s", "save", "Save"),
    ]

    def __init__(self, tile_map: TileMap, config: GenerationConfig):
        """Initialize WaveViewerTUI.

        Args:
            tile_map: Sample map to learn patterns from
            config: Radius, output size, seed and auto-step interval

        Raises:
            ValueError: If the sample holds no pattern of the configured radius
        """
        super().__init__()
        self._tile_map = tile_map
        self._settings = config
        self._catalog = build_catalog(tile_map.to_grid(), config.radius)
        self.wave = Wave.from_catalog(self._catalog, config.width, config.height, config.seed)
        self._attempt = 0
        self._auto_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield WaveHeader(id="header")
        with Horizontal(id="main"):
            yield WaveView(self.wave, self._tile_map.tiles, id="wave")
            yield Static(
                render_values(self._tile_map.to_grid(), self._tile_map.tiles),
                id="sample",
            )
        yield Footer()

    def on_mount(self) -> None:
        self._update_header()

    @property
    def run_status(self) -> str:
        if not self.wave.is_complete():
            return "RUNNING" if self._auto_timer is not None else "IDLE"
        return "CONTRADICTION" if self.wave.has_contradiction() else "COMPLETE"

    def _update_header(self) -> None:
        header = self.query_one("#header", WaveHeader)
        header.update_state(
            step=self.wave.step_count,
            seed=self.wave.seed,
            patterns=len(self._catalog),
            dimensions=(self.wave.width, self.wave.height),
            decided=(self.wave.decided_count(), self.wave.width * self.wave.height),
            status=self.run_status,
        )

    def _refresh_wave(self) -> None:
        self.query_one("#wave", WaveView).refresh()
        self._update_header()

    def _stop_auto(self) -> None:
        if self._auto_timer is not None:
            self._auto_timer.stop()
            self._auto_timer = None

    def _auto_step(self) -> None:
        if self.wave.step() is None:
            self._stop_auto()
        self._refresh_wave()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_step(self) -> None:
        """Decide one cell."""
        self.wave.step()
        self._refresh_wave()

    def action_toggle_auto(self) -> None:
        """Start or stop stepping on a timer."""
        if self._auto_timer is not None:
            self._stop_auto()
            log_viewer_cmd(logger, "auto", "stopped")
        elif not self.wave.is_complete():
            self._auto_timer = self.set_interval(self._settings.auto_step_interval, self._auto_step)
            log_viewer_cmd(logger, "auto", "started")
        self._update_header()

    def action_finish(self) -> None:
        """Run the wave to completion."""
        self._stop_auto()
        steps = self.wave.collapse_full()
        log_viewer_cmd(logger, "finish", f"steps={steps}")
        self._refresh_wave()

    def action_reset(self) -> None:
        """Start over with the next derived seed."""
        self._stop_auto()
        self._attempt += 1
        seed = derive_seed(self._settings.seed, self._attempt)
        self.wave.reset(seed)
        log_viewer_cmd(logger, "reset", f"seed={seed}")
        self._refresh_wave()

    def action_show_patterns(self) -> None:
        """Open the pattern viewer."""
        log_viewer_cmd(logger, "patterns", f"count={len(self._catalog)}")
        self.push_screen(PatternViewer(self._catalog, self._tile_map.tiles))

    def action_toggle_entropy(self) -> None:
        """Show entropy digits in undecided cells."""
        view = self.query_one("#wave", WaveView)
        view.show_entropy = not view.show_entropy

    def action_save(self) -> None:
        """Save a finished output under the data directory."""
        if not self.wave.is_complete():
            self.notify("Finish the wave before saving", severity="warning")
            return

        path = self._settings.data_dir / f"output_{self.wave.seed}.yaml"
        try:
            save_output(self.wave, self._tile_map.tiles, path)
        except (StorageError, OSError) as e:
            logger.error(f"Saving output failed: {e}")
            self.notify(f"Save failed: {e}", severity="error")
            return
        log_viewer_cmd(logger, "save", str(path))
        self.notify(f"Saved {path}")


class SampleEditorTUI(App):
    """Editor for sample tile maps.

    Arrow keys move the cursor, 1-9 pick a tile, 0 picks the eraser, enter
    paints, +/- grow or shrink the map and s saves it.
    """

    CSS_PATH = "theme.tcss"
    TITLE = "Tessera Sample Editor"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("s", "save", "Save"),
        Binding("enter", "paint", "Paint"),
        Binding("plus", "grow", "Grow"),
        Binding("minus", "shrink", "Shrink"),
        Binding("up", "move(0, -1)", "Up", show=False),
        Binding("down", "move(0, 1)", "Down", show=False),
        Binding("left", "move(-1, 0)", "Left", show=False),
        Binding("right", "move(1, 0)", "Right", show=False),
        *[Binding(str(i), f"pick_tile({i})", show=False) for i in range(10)],
    ]

    def __init__(self, tile_map: TileMap, path: Path):
        """Initialize SampleEditorTUI.

        Args:
            tile_map: Map to start from
            path: Where to save (.yaml, .yml or .json)
        """
        super().__init__()
        self._initial = tile_map
        self._save_path = path

    def compose(self) -> ComposeResult:
        yield Static(f"Editing {self._save_path}", id="header")
        yield SampleEditor(self._initial, id="editor")
        yield Footer()

    @property
    def tile_map(self) -> TileMap:
        return self.query_one("#editor", SampleEditor).tile_map

    def action_move(self, dx: int, dy: int) -> None:
        self.query_one("#editor", SampleEditor).move_cursor(dx, dy)

    def action_pick_tile(self, number: int) -> None:
        """Pick tile number (1-based); 0 is the eraser."""
        self.query_one("#editor", SampleEditor).choose_tile(None if number == 0 else number - 1)

    def action_paint(self) -> None:
        self.query_one("#editor", SampleEditor).paint()

    def action_grow(self) -> None:
        self.query_one("#editor", SampleEditor).resize_map(1, 1)

    def action_shrink(self) -> None:
        self.query_one("#editor", SampleEditor).resize_map(-1, -1)

    def action_save(self) -> None:
        try:
            save_tile_map(self.tile_map, self._save_path)
        except (StorageError, OSError) as e:
            logger.error(f"Saving sample failed: {e}")
            self.notify(f"Save failed: {e}", severity="error")
            return
        log_viewer_cmd(logger, "save_sample", str(self._save_path))
        self.notify(f"Saved {self._save_path}")


async def run_viewer(tile_map: TileMap, config: GenerationConfig) -> None:
    """Run the wave viewer."""
    app = WaveViewerTUI(tile_map, config)
    await app.run_async()


async def run_editor(tile_map: TileMap, path: Path) -> None:
    """Run the sample editor."""
    app = SampleEditorTUI(tile_map, path)
    await app.run_async()
