"""Smoke tests for the Textual viewer and editor."""

import pytest

from tessera.generation import derive_seed
from tessera.observe.tui import SampleEditorTUI, WaveViewerTUI
from tessera.observe.tui.widgets import PatternViewer, WaveHeader, WaveView
from tessera.settings import GenerationConfig
from tessera.storage import load_output, load_tile_map


@pytest.fixture
def viewer_config(temp_data_dir) -> GenerationConfig:
    """Small output so the wave fits on screen."""
    return GenerationConfig(width=6, height=5, seed=1, data_dir=temp_data_dir)


class TestWaveViewer:
    """Test the wave viewer app."""

    async def test_step_key(self, island_map, viewer_config):
        """Space decides one cell and updates the header."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            await pilot.press("space")
            assert app.wave.step_count == 1
            header = app.query_one("#header", WaveHeader)
            assert header.step == 1
            assert header.decided == "1/30"
            assert header.status == "IDLE"

    async def test_finish_key(self, island_map, viewer_config):
        """f runs the wave to the end."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            await pilot.press("f")
            assert app.wave.is_complete()
            assert app.query_one("#header", WaveHeader).status in ("COMPLETE", "CONTRADICTION")

    async def test_reset_key(self, island_map, viewer_config):
        """r starts over with the next derived seed."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            await pilot.press("f", "r")
            assert app.wave.seed == derive_seed(1, 1)
            assert app.wave.step_count == 0
            assert app.wave.decided_count() == 0

    async def test_auto_toggle(self, island_map, viewer_config):
        """a starts and stops the auto-step timer."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            await pilot.press("a")
            assert app.run_status in ("RUNNING", "COMPLETE", "CONTRADICTION")
            await pilot.press("a")
            await pilot.pause()
            assert app.run_status != "RUNNING"

    async def test_entropy_toggle(self, island_map, viewer_config):
        """e toggles entropy digits."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            view = app.query_one("#wave", WaveView)
            assert not view.show_entropy
            await pilot.press("e")
            assert view.show_entropy

    async def test_pattern_viewer(self, island_map, viewer_config):
        """p opens the pattern viewer, which pages through the catalog."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            await pilot.press("p")
            assert isinstance(app.screen, PatternViewer)
            await pilot.press("left")
            assert app.screen.current == 0
            await pilot.press("right")
            assert app.screen.current == 1
            await pilot.press("escape")
            assert not isinstance(app.screen, PatternViewer)

    async def test_save_requires_finished_wave(self, island_map, viewer_config, temp_data_dir):
        """s only writes once the wave is finished."""
        app = WaveViewerTUI(island_map, viewer_config)
        async with app.run_test() as pilot:
            await pilot.press("s")
            assert list(temp_data_dir.glob("output_*.yaml")) == []
            await pilot.press("f", "s")

        path = temp_data_dir / "output_1.yaml"
        assert path.exists()
        assert load_output(path).width == 6


class TestSampleEditor:
    """Test the sample editor app."""

    async def test_paint_and_save(self, island_map, temp_data_dir):
        """Painting, erasing, growing and saving a map."""
        path = temp_data_dir / "sample.yaml"
        app = SampleEditorTUI(island_map, path)
        async with app.run_test() as pilot:
            await pilot.press("3", "enter")
            assert app.tile_map.at(0, 0) == 2

            await pilot.press("right", "down", "0", "enter")
            assert app.tile_map.at(1, 1) is None

            await pilot.press("plus")
            assert app.tile_map.width == 7
            assert app.tile_map.height == 7

            await pilot.press("s")

        saved = load_tile_map(path)
        assert saved.width == 7
        assert saved.at(0, 0) == 2
        assert saved.at(1, 1) is None

    async def test_cursor_stays_on_map(self, island_map, temp_data_dir):
        """The cursor can't leave the map."""
        app = SampleEditorTUI(island_map, temp_data_dir / "sample.yaml")
        async with app.run_test() as pilot:
            await pilot.press("up", "left", "enter")
            assert app.tile_map.at(0, 0) is None

    async def test_unknown_tile_number_ignored(self, island_map, temp_data_dir):
        """Numbers past the vocabulary don't change the selection."""
        app = SampleEditorTUI(island_map, temp_data_dir / "sample.yaml")
        async with app.run_test() as pilot:
            await pilot.press("2", "9", "enter")
            assert app.tile_map.at(0, 0) == 1
