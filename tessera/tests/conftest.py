"""Shared test fixtures for Tessera."""

import tempfile
from pathlib import Path

import pytest

from tessera.core.grid import Grid
from tessera.core.tiles import TileData
from tessera.core.tile_map import TileMap


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="tessera_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def uniform_sample() -> Grid[str]:
    """5x5 sample of a single tile."""
    return Grid.filled(5, 5, "A")


@pytest.fixture
def center_b_sample() -> Grid[str]:
    """5x5 sample of A with a single B in the middle."""
    grid = Grid.filled(5, 5, "A")
    grid.set(2, 2, "B")
    return grid


@pytest.fixture
def stripes_sample() -> Grid[str]:
    """6x6 sample of alternating vertical stripes."""
    return Grid.generate(6, 6, lambda x, y: "A" if x % 2 == 0 else "B")


@pytest.fixture
def tiles() -> list[TileData]:
    """A small vocabulary."""
    return [
        TileData(name="water", symbol="~", color="blue"),
        TileData(name="sand", symbol=":", color="yellow"),
        TileData(name="grass", symbol=".", color="green"),
    ]


@pytest.fixture
def island_map(tiles: list[TileData]) -> TileMap:
    """6x6 map: sand ring with grass inside, water border."""
    rows = [
        [0, 0, 0, 0, 0, 0],
        [0, 1, 1, 1, 1, 0],
        [0, 1, 2, 2, 1, 0],
        [0, 1, 2, 2, 1, 0],
        [0, 1, 1, 1, 1, 0],
        [0, 0, 0, 0, 0, 0],
    ]
    return TileMap.from_grid(Grid.from_rows(rows), tiles)
