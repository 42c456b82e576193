"""Grid - bounded rows x cols board with 4-way adjacency."""
from __future__ import annotations

from typing import Iterator

from forest_rails.types import Cell, Edge, Orientation


def normalize(a: Cell, b: Cell) -> Edge:
    if b < a:
        a, b = b, a
    return Edge(a, b)


def is_adjacent(a: Cell, b: Cell) -> bool:
    return abs(a.row - b.row) + abs(a.col - b.col) == 1


class Grid:
    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def area(self) -> int:
        return self._rows * self._cols

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell.row < self._rows and 0 <= cell.col < self._cols

    def cells(self) -> Iterator[Cell]:
        for r in range(self._rows):
            for c in range(self._cols):
                yield Cell(r, c)

    def row_cells(self, row: int) -> list[Cell]:
        return [Cell(row, c) for c in range(self._cols)]

    def neighbors(self, cell: Cell) -> list[Cell]:
        dirs = [(-1, 0), (1, 0), (0, -1), (0, 1)]
        result: list[Cell] = []
        for dr, dc in dirs:
            nb = Cell(cell.row + dr, cell.col + dc)
            if self.contains(nb):
                result.append(nb)
        return result

    def fence_neighbor(self, cell: Cell, orientation: Orientation) -> Cell | None:
        """Return the cell a fence on *cell* blocks towards, or None.

        Vertical fences face the right-hand neighbor, falling back to the
        left one on the last column. Horizontal fences face the neighbor
        below, falling back to the one above on the last row.
        """
        if orientation is Orientation.VERTICAL:
            candidates = (Cell(cell.row, cell.col + 1), Cell(cell.row, cell.col - 1))
        else:
            candidates = (Cell(cell.row + 1, cell.col), Cell(cell.row - 1, cell.col))
        for nb in candidates:
            if self.contains(nb):
                return nb
        return None
