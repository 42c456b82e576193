"""Forest - frontier growth over unblocked adjacency."""
from __future__ import annotations

import random
from typing import Callable

from forest_rails.grid import Grid
from forest_rails.types import Cell

BlockedFn = Callable[[Cell, Cell], bool]


class Forest:
    """Claimed cells and their sprite variants.

    Membership only grows; a claimed cell keeps the variant it was given
    at claim time until the next reset.
    """

    def __init__(self, grid: Grid, variant_count: int = 4) -> None:
        self._grid = grid
        self._variant_count = variant_count
        self._variants: dict[Cell, int] = {}

    def reset(self, rng: random.Random) -> Cell:
        """Clear the forest and claim one uniformly random seed cell."""
        self._variants.clear()
        seed = Cell(rng.randrange(self._grid.rows), rng.randrange(self._grid.cols))
        self._claim(seed, rng)
        return seed

    def frontier(self, is_blocked: BlockedFn) -> set[Cell]:
        """Unclaimed cells next to the forest across an unblocked edge."""
        candidates: set[Cell] = set()
        for cell in self._variants:
            for nb in self._grid.neighbors(cell):
                if nb not in self._variants and not is_blocked(cell, nb):
                    candidates.add(nb)
        return candidates

    def grow_one(self, rng: random.Random, is_blocked: BlockedFn) -> Cell | None:
        """Claim one frontier cell chosen uniformly. None if growth stalls."""
        candidates = self.frontier(is_blocked)
        if not candidates:
            return None
        cell = rng.choice(sorted(candidates))
        self._claim(cell, rng)
        return cell

    def _claim(self, cell: Cell, rng: random.Random) -> None:
        self._variants[cell] = rng.randint(1, self._variant_count)

    # --- Queries ---

    def __len__(self) -> int:
        return len(self._variants)

    def contains(self, cell: Cell) -> bool:
        return cell in self._variants

    def variant(self, cell: Cell) -> int | None:
        return self._variants.get(cell)

    def variants(self) -> dict[Cell, int]:
        return dict(self._variants)

    def is_full(self) -> bool:
        return len(self._variants) >= self._grid.area

    # --- Serialization ---

    def snapshot(self) -> list[list[int]]:
        return [[c.row, c.col, v] for c, v in sorted(self._variants.items())]

    def restore(self, data: list[list[int]]) -> None:
        self._variants = {Cell(r, c): v for r, c, v in data}
