"""FenceManager - pending/active/expired lifecycle for fence segments."""
from __future__ import annotations

import logging

from forest_rails.grid import Grid, is_adjacent, normalize
from forest_rails.types import Cell, Edge, FenceSegment, Orientation, PendingFence

logger = logging.getLogger(__name__)


class FenceManager:
    """Owns fence segments and the set of edges they block.

    A segment moves absent -> pending on request, pending -> active once
    its build delay passes, and active -> absent once its lifespan passes.
    Only active fences block an edge.
    """

    def __init__(self, grid: Grid, build_delay: float = 0.5, lifespan: float = 10.0) -> None:
        self._grid = grid
        self._build_delay = build_delay
        self._lifespan = lifespan
        self._pending: list[PendingFence] = []
        self._active: dict[FenceSegment, float] = {}
        self._blocked: set[Edge] = set()

    # --- Placement ---

    def request_placement(self, cell: Cell, orientation: Orientation, now: float) -> bool:
        """Queue a fence build. Returns False, changing nothing, if rejected."""
        if not self._grid.contains(cell):
            logger.debug("fence rejected: %s is off the grid", cell)
            return False
        seg = FenceSegment(cell, orientation)
        if seg in self._active or self._find_pending(seg) is not None:
            logger.debug("fence rejected: %s already placed", seg)
            return False
        nb = self._grid.fence_neighbor(cell, orientation)
        if nb is None or not is_adjacent(cell, nb):
            logger.debug("fence rejected: %s has no neighbor to block", seg)
            return False
        self._pending.append(PendingFence(seg, now + self._build_delay))
        return True

    # --- Tick ---

    def tick(self, now: float) -> tuple[list[FenceSegment], list[FenceSegment]]:
        """Promote due pending fences, then expire due active ones.

        Returns ``(promoted, expired)`` segments in processing order.
        """
        promoted: list[FenceSegment] = []
        if self._pending:
            keep: list[PendingFence] = []
            for item in self._pending:
                if now >= item.commit_at:
                    self._active[item.segment] = now + self._lifespan
                    edge = self._edge_of(item.segment)
                    if edge is not None:
                        self._blocked.add(edge)
                    promoted.append(item.segment)
                else:
                    keep.append(item)
            self._pending = keep

        expired: list[FenceSegment] = []
        for seg, expires_at in list(self._active.items()):
            if now >= expires_at:
                del self._active[seg]
                expired.append(seg)
        # Two segments can share an edge; it stays blocked while either is active.
        if expired:
            self._blocked = {
                edge for edge in map(self._edge_of, self._active) if edge is not None
            }
        return promoted, expired

    def clear(self) -> None:
        self._pending.clear()
        self._active.clear()
        self._blocked.clear()

    # --- Queries ---

    def is_pending(self, cell: Cell, orientation: Orientation) -> bool:
        return self._find_pending(FenceSegment(cell, orientation)) is not None

    def is_active(self, cell: Cell, orientation: Orientation) -> bool:
        return FenceSegment(cell, orientation) in self._active

    def expires_at(self, cell: Cell, orientation: Orientation) -> float | None:
        return self._active.get(FenceSegment(cell, orientation))

    def progress(self, cell: Cell, orientation: Orientation, now: float) -> float:
        """Build progress of a pending fence in [0, 1]; 0 when not pending."""
        item = self._find_pending(FenceSegment(cell, orientation))
        if item is None:
            return 0.0
        remaining = max(0.0, item.commit_at - now)
        return min(1.0, max(0.0, 1.0 - remaining / self._build_delay))

    def is_blocked(self, a: Cell, b: Cell) -> bool:
        return normalize(a, b) in self._blocked

    def pending(self) -> tuple[PendingFence, ...]:
        return tuple(self._pending)

    def active(self) -> dict[FenceSegment, float]:
        return dict(self._active)

    def blocked_edges(self) -> frozenset[Edge]:
        return frozenset(self._blocked)

    # --- Serialization ---

    def snapshot(self) -> dict:
        return {
            "pending": [
                [p.segment.cell.row, p.segment.cell.col, p.segment.orientation.value, p.commit_at]
                for p in self._pending
            ],
            "active": [
                [seg.cell.row, seg.cell.col, seg.orientation.value, expires_at]
                for seg, expires_at in self._active.items()
            ],
        }

    def restore(self, data: dict) -> None:
        self._pending = [
            PendingFence(FenceSegment(Cell(r, c), Orientation(o)), commit_at)
            for r, c, o, commit_at in data.get("pending", [])
        ]
        self._active = {
            FenceSegment(Cell(r, c), Orientation(o)): expires_at
            for r, c, o, expires_at in data.get("active", [])
        }
        self._blocked = {
            edge for edge in map(self._edge_of, self._active) if edge is not None
        }

    # --- Internal ---

    def _find_pending(self, seg: FenceSegment) -> PendingFence | None:
        for item in self._pending:
            if item.segment == seg:
                return item
        return None

    def _edge_of(self, seg: FenceSegment) -> Edge | None:
        nb = self._grid.fence_neighbor(seg.cell, seg.orientation)
        if nb is None:
            return None
        return normalize(seg.cell, nb)
