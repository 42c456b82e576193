"""Tests for forest_rails.grid - geometry and fence targets."""

import pytest
from forest_rails import Cell, Edge, Grid, Orientation, is_adjacent, normalize


class TestCell:
    def test_cells_compare_by_value(self):
        assert Cell(2, 3) == Cell(2, 3)
        assert hash(Cell(2, 3)) == hash(Cell(2, 3))

    def test_cells_order_row_then_column(self):
        assert Cell(0, 5) < Cell(1, 0)
        assert Cell(1, 0) < Cell(1, 1)
        assert sorted([Cell(1, 1), Cell(0, 9), Cell(1, 0)]) == [
            Cell(0, 9), Cell(1, 0), Cell(1, 1),
        ]


class TestNormalize:
    def test_normalize_is_order_independent(self):
        a, b = Cell(2, 3), Cell(1, 3)
        assert normalize(a, b) == normalize(b, a)
        assert normalize(a, b) == Edge(Cell(1, 3), Cell(2, 3))

    def test_normalized_edges_work_as_set_members(self):
        edges = {normalize(Cell(0, 0), Cell(0, 1)), normalize(Cell(0, 1), Cell(0, 0))}
        assert len(edges) == 1


class TestIsAdjacent:
    def test_one_step_on_one_axis(self):
        assert is_adjacent(Cell(0, 0), Cell(0, 1))
        assert is_adjacent(Cell(3, 2), Cell(2, 2))

    def test_diagonal_is_not_adjacent(self):
        assert not is_adjacent(Cell(0, 0), Cell(1, 1))

    def test_same_cell_is_not_adjacent(self):
        assert not is_adjacent(Cell(4, 4), Cell(4, 4))

    def test_two_steps_is_not_adjacent(self):
        assert not is_adjacent(Cell(0, 0), Cell(0, 2))


class TestGrid:
    def test_grid_construction(self):
        grid = Grid(10, 18)
        assert grid.rows == 10
        assert grid.cols == 18
        assert grid.area == 180

    def test_empty_grid_raises(self):
        with pytest.raises(ValueError, match="at least 1x1"):
            Grid(0, 5)
        with pytest.raises(ValueError, match="at least 1x1"):
            Grid(5, 0)

    def test_contains(self):
        grid = Grid(3, 4)
        assert grid.contains(Cell(0, 0))
        assert grid.contains(Cell(2, 3))
        assert not grid.contains(Cell(3, 0))
        assert not grid.contains(Cell(0, 4))
        assert not grid.contains(Cell(-1, 0))

    def test_cells_covers_grid(self):
        grid = Grid(3, 4)
        cells = list(grid.cells())
        assert len(cells) == 12
        assert len(set(cells)) == 12

    def test_row_cells(self):
        grid = Grid(3, 4)
        assert grid.row_cells(1) == [Cell(1, 0), Cell(1, 1), Cell(1, 2), Cell(1, 3)]

    def test_neighbors_interior(self):
        grid = Grid(3, 4)
        assert grid.neighbors(Cell(1, 1)) == [
            Cell(0, 1), Cell(2, 1), Cell(1, 0), Cell(1, 2),
        ]

    def test_neighbors_corner(self):
        grid = Grid(3, 4)
        assert grid.neighbors(Cell(0, 0)) == [Cell(1, 0), Cell(0, 1)]
        assert grid.neighbors(Cell(2, 3)) == [Cell(1, 3), Cell(2, 2)]

    def test_neighbors_single_cell_grid(self):
        assert Grid(1, 1).neighbors(Cell(0, 0)) == []

    def test_neighbors_are_adjacent(self):
        grid = Grid(4, 5)
        for cell in grid.cells():
            for nb in grid.neighbors(cell):
                assert is_adjacent(cell, nb)


class TestFenceNeighbor:
    def test_vertical_faces_right(self):
        grid = Grid(3, 4)
        assert grid.fence_neighbor(Cell(1, 1), Orientation.VERTICAL) == Cell(1, 2)

    def test_vertical_on_last_column_faces_left(self):
        grid = Grid(3, 4)
        assert grid.fence_neighbor(Cell(1, 3), Orientation.VERTICAL) == Cell(1, 2)

    def test_horizontal_faces_down(self):
        grid = Grid(3, 4)
        assert grid.fence_neighbor(Cell(1, 1), Orientation.HORIZONTAL) == Cell(2, 1)

    def test_horizontal_on_last_row_faces_up(self):
        grid = Grid(3, 4)
        assert grid.fence_neighbor(Cell(2, 1), Orientation.HORIZONTAL) == Cell(1, 1)

    def test_no_neighbor_on_degenerate_axis(self):
        assert Grid(1, 4).fence_neighbor(Cell(0, 2), Orientation.HORIZONTAL) is None
        assert Grid(4, 1).fence_neighbor(Cell(2, 0), Orientation.VERTICAL) is None
        single = Grid(1, 1)
        assert single.fence_neighbor(Cell(0, 0), Orientation.HORIZONTAL) is None
        assert single.fence_neighbor(Cell(0, 0), Orientation.VERTICAL) is None
