"""RailNetwork - rail placement, line completion and train scheduling."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from forest_rails.grid import Grid
from forest_rails.types import Cell, Train, TrainId

if TYPE_CHECKING:
    from forest_rails.forest import Forest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainEvent:
    """Outcome of one due train in a tick: "moved", "blocked" or "completed".

    `completed` is the running completion count right after this event.
    """

    kind: str
    train: Train
    completed: int


class RailNetwork:
    """Rail cells plus the trains running along completed rows.

    Trains run left to right. A row spawns a train when every column in it
    has rail and no live train is on it. Trains are delayed by forest ahead
    of them, never removed by it.
    """

    def __init__(self, grid: Grid, transit_time: float = 2.0, retry_interval: float = 0.5) -> None:
        self._grid = grid
        self._transit_time = transit_time
        self._retry_interval = retry_interval
        self._rails: set[Cell] = set()
        self._trains: list[Train] = []
        self._next_id: TrainId = 1
        self._completed = 0

    @property
    def completed(self) -> int:
        return self._completed

    # --- Placement ---

    def place(self, cell: Cell, now: float, forest: Forest) -> bool:
        """Lay rail on *cell*. Rejected on forest or off-grid cells.

        Placing on an existing rail is accepted and re-runs the line check
        for that row.
        """
        if not self._grid.contains(cell):
            logger.debug("rail rejected: %s is off the grid", cell)
            return False
        if forest.contains(cell):
            logger.debug("rail rejected: %s is forest", cell)
            return False
        self._rails.add(cell)
        self.spawn_if_ready(cell.row, now)
        return True

    def line_ready(self, row: int) -> bool:
        return all(cell in self._rails for cell in self._grid.row_cells(row))

    def spawn_if_ready(self, row: int, now: float) -> Train | None:
        if not self.line_ready(row) or self.train_on_row(row) is not None:
            return None
        train = Train(id=self._next_id, row=row, col=0, next_move_at=now)
        self._next_id += 1
        self._trains.append(train)
        logger.info("train %d spawned on row %d", train.id, row)
        return train

    # --- Tick ---

    def tick(self, now: float, forest: Forest) -> list[TrainEvent]:
        """Advance every due train once, in spawn order."""
        events: list[TrainEvent] = []
        last_col = self._grid.cols - 1
        keep: list[Train] = []
        for train in self._trains:
            if now < train.next_move_at:
                keep.append(train)
                continue
            if train.col >= last_col:
                self._completed += 1
                logger.info("train %d completed row %d", train.id, train.row)
                events.append(TrainEvent("completed", train, self._completed))
                continue
            ahead = Cell(train.row, train.col + 1)
            if ahead in self._rails and not forest.contains(ahead):
                train = train.moved(ahead.col, now + self._transit_time)
                logger.debug("train %d moved to %s", train.id, ahead)
                events.append(TrainEvent("moved", train, self._completed))
            else:
                train = train.moved(train.col, now + self._retry_interval)
                events.append(TrainEvent("blocked", train, self._completed))
            keep.append(train)
        self._trains = keep
        return events

    def clear(self) -> None:
        self._rails.clear()
        self._trains.clear()
        self._next_id = 1
        self._completed = 0

    # --- Queries ---

    def has_rail(self, cell: Cell) -> bool:
        return cell in self._rails

    def rails(self) -> frozenset[Cell]:
        return frozenset(self._rails)

    def trains(self) -> tuple[Train, ...]:
        return tuple(self._trains)

    def train_on_row(self, row: int) -> Train | None:
        for train in self._trains:
            if train.row == row:
                return train
        return None

    # --- Serialization ---

    def snapshot(self) -> dict:
        return {
            "rails": [[c.row, c.col] for c in sorted(self._rails)],
            "trains": [
                {"id": t.id, "row": t.row, "col": t.col, "next_move_at": t.next_move_at}
                for t in self._trains
            ],
            "next_id": self._next_id,
            "completed": self._completed,
        }

    def restore(self, data: dict) -> None:
        self._rails = {Cell(r, c) for r, c in data.get("rails", [])}
        self._trains = [Train(**t) for t in data.get("trains", [])]
        self._next_id = data.get("next_id", 1)
        self._completed = data.get("completed", 0)
