"""Shared value types for the forest-rails simulation."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

TrainId = int


@dataclass(frozen=True, slots=True, order=True)
class Cell:
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class Edge:
    """Undirected pair of adjacent cells. Build with ``grid.normalize``."""

    a: Cell
    b: Cell


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class BuildMode(Enum):
    FENCE = "fence"
    RAIL = "rail"


@dataclass(frozen=True, slots=True)
class FenceSegment:
    cell: Cell
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class PendingFence:
    segment: FenceSegment
    commit_at: float


@dataclass(frozen=True, slots=True)
class Train:
    """A train running left to right along a completed rail row."""

    id: TrainId
    row: int
    col: int
    next_move_at: float

    @property
    def cell(self) -> Cell:
        return Cell(self.row, self.col)

    def moved(self, col: int, next_move_at: float) -> Train:
        return replace(self, col=col, next_move_at=next_move_at)


class SnapshotError(Exception):
    """Raised on restore failures (version or grid size mismatch)."""
