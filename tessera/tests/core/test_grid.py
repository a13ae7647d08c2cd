"""Tests for Grid and Position."""

import pytest

from tessera.core.grid import Grid
from tessera.core.types import Position


class TestPosition:
    """Test Position arithmetic."""

    def test_add_offset(self):
        """Adding a tuple should offset the position."""
        assert Position(2, 3) + (1, -1) == Position(3, 2)

    def test_sub_offset(self):
        """Subtracting a tuple should offset the other way."""
        assert Position(2, 3) - (2, 3) == Position(0, 0)

    def test_in_bounds(self):
        """Should check against width and height."""
        assert Position(0, 0).in_bounds(1, 1)
        assert not Position(1, 0).in_bounds(1, 1)
        assert not Position(-1, 0).in_bounds(5, 5)


class TestGridConstruction:
    """Test building grids."""

    def test_filled(self):
        """filled() should set every cell."""
        grid = Grid.filled(3, 2, "A")
        assert grid.width == 3
        assert grid.height == 2
        assert list(grid) == ["A"] * 6

    def test_generate_is_row_major(self):
        """generate() should call the factory with (x, y) row by row."""
        grid = Grid.generate(3, 2, lambda x, y: (x, y))
        assert list(grid) == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_from_rows(self):
        """from_rows() should index as rows[y][x]."""
        grid = Grid.from_rows([[1, 2, 3], [4, 5, 6]])
        assert grid.at(2, 0) == 3
        assert grid.at(0, 1) == 4

    def test_from_rows_rejects_ragged(self):
        """Rows of different lengths are a contract violation."""
        with pytest.raises(ValueError):
            Grid.from_rows([[1, 2], [3]])

    def test_wrong_cell_count(self):
        """Storage length must match width * height."""
        with pytest.raises(ValueError):
            Grid(2, 2, [1, 2, 3])

    def test_negative_dimensions(self):
        """Negative sizes are rejected."""
        with pytest.raises(ValueError):
            Grid(-1, 2, [])

    def test_empty_grid(self):
        """A 0x0 grid is allowed and empty."""
        grid = Grid(0, 0, [])
        assert len(grid) == 0
        assert list(grid.positions()) == []


class TestGridAccess:
    """Test reading and writing cells."""

    def test_set_and_at(self):
        """set() should replace exactly one cell."""
        grid = Grid.filled(3, 3, 0)
        grid.set(1, 2, 9)
        assert grid.at(1, 2) == 9
        assert sum(grid) == 9

    def test_item_access(self):
        """Tuple indexing should match at()/set()."""
        grid = Grid.filled(2, 2, 0)
        grid[(1, 0)] = 5
        assert grid[1, 0] == 5
        assert grid.at(1, 0) == 5

    @pytest.mark.parametrize("x,y", [(3, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_bounds_raises(self, x, y):
        """Out-of-bounds access is a contract violation, not a wrap-around."""
        grid = Grid.filled(3, 3, 0)
        with pytest.raises(IndexError):
            grid.at(x, y)
        with pytest.raises(IndexError):
            grid.set(x, y, 1)

    def test_in_bounds(self):
        """in_bounds() should accept exactly the valid coordinates."""
        grid = Grid.filled(2, 3, 0)
        assert grid.in_bounds(1, 2)
        assert not grid.in_bounds(2, 0)
        assert not grid.in_bounds(0, 3)


class TestGridIteration:
    """Test iteration helpers."""

    def test_positions_row_major(self):
        """positions() should go y outer, x inner."""
        grid = Grid.filled(2, 2, 0)
        assert list(grid.positions()) == [
            Position(0, 0), Position(1, 0), Position(0, 1), Position(1, 1)
        ]

    def test_items_pairs_positions_with_values(self):
        """items() should pair each position with its value."""
        grid = Grid.generate(2, 2, lambda x, y: x + 10 * y)
        for pos, value in grid.items():
            assert value == pos.x + 10 * pos.y

    def test_rows(self):
        """rows() should return copies of each row."""
        grid = Grid.from_rows([[1, 2], [3, 4]])
        rows = grid.rows()
        assert rows == [[1, 2], [3, 4]]
        rows[0][0] = 99
        assert grid.at(0, 0) == 1


class TestGridNeighbors:
    """Test window neighbor enumeration."""

    def test_radius_one_has_no_neighbors(self):
        """Radius 1 is only the center."""
        grid = Grid.filled(3, 3, 0)
        assert list(grid.neighbors((1, 1), 1)) == []

    def test_radius_two_interior(self):
        """Radius 2 is the eight surrounding cells."""
        grid = Grid.filled(5, 5, 0)
        neighbors = list(grid.neighbors((2, 2), 2))
        assert len(neighbors) == 8
        assert Position(2, 2) not in neighbors
        assert neighbors[0] == Position(1, 1)
        assert neighbors[-1] == Position(3, 3)

    def test_window_clipped_at_corner(self):
        """Positions off the grid are skipped."""
        grid = Grid.filled(5, 5, 0)
        neighbors = set(grid.neighbors((0, 0), 2))
        assert neighbors == {Position(1, 0), Position(0, 1), Position(1, 1)}

    def test_radius_zero_rejected(self):
        """Radius must be at least 1."""
        grid = Grid.filled(3, 3, 0)
        with pytest.raises(ValueError):
            list(grid.neighbors((1, 1), 0))


class TestGridValueSemantics:
    """Test map, copy and equality."""

    def test_map(self):
        """map() should transform every value into a new grid."""
        grid = Grid.from_rows([[1, 2], [3, 4]])
        doubled = grid.map(lambda v: v * 2)
        assert doubled == Grid.from_rows([[2, 4], [6, 8]])
        assert grid.at(0, 0) == 1

    def test_copy_is_independent(self):
        """Changing a copy should leave the original alone."""
        grid = Grid.filled(2, 2, 0)
        copy = grid.copy()
        copy.set(0, 0, 1)
        assert grid.at(0, 0) == 0
        assert copy != grid

    def test_equality_includes_shape(self):
        """Same values in a different shape are not equal."""
        assert Grid(2, 3, range(6)) != Grid(3, 2, range(6))
        assert Grid(2, 3, range(6)) == Grid(2, 3, range(6))

    def test_grids_are_unhashable(self):
        """Mutable grids can't be dict keys."""
        with pytest.raises(TypeError):
            hash(Grid.filled(1, 1, 0))

    def test_str(self):
        """str() should lay out rows on lines."""
        assert str(Grid.from_rows([["A", "B"], ["C", "D"]])) == "A B\nC D"
