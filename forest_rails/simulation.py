"""Simulation - one forest-rails scene: state, user actions and the pulse."""
from __future__ import annotations

import logging
import os
import random
from typing import Any

from forest_rails.config import GameConfig
from forest_rails.fences import FenceManager
from forest_rails.forest import Forest
from forest_rails.grid import Grid
from forest_rails.rails import RailNetwork
from forest_rails.signals import SignalBus
from forest_rails.types import (
    BuildMode,
    Cell,
    FenceSegment,
    Orientation,
    PendingFence,
    SnapshotError,
    Train,
)

logger = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1


class Simulation:
    """Owns the forest, fences, rails and trains of one scene.

    The host drives it with ``grow()`` on the slow cadence and
    ``pulse(now)`` on the fast cadence; user actions take the same ``now``.
    Nothing here reads a clock. Once the scene is won or lost, growth and
    placements are ignored until ``reset()``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config if config is not None else GameConfig()
        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

        cfg = self._config
        self._grid = Grid(cfg.rows, cfg.cols)
        self._forest = Forest(self._grid, cfg.variant_count)
        self._fences = FenceManager(self._grid, cfg.build_delay, cfg.fence_lifespan)
        self._rails = RailNetwork(self._grid, cfg.transit_time, cfg.retry_interval)
        self._signals = SignalBus()

        self._won = False
        self._lost = False
        self.build_mode = BuildMode.RAIL
        self.fence_orientation = Orientation.HORIZONTAL
        self.reset()

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def signals(self) -> SignalBus:
        return self._signals

    @property
    def won(self) -> bool:
        return self._won

    @property
    def lost(self) -> bool:
        return self._lost

    @property
    def finished(self) -> bool:
        return self._won or self._lost

    # --- Lifecycle ---

    def reset(self) -> None:
        """Clear every component and reseed the forest from one random cell."""
        self._fences.clear()
        self._rails.clear()
        self._won = False
        self._lost = False
        seed_cell = self._forest.reset(self._rng)
        logger.info(
            "scene reset: %dx%d grid, forest seeded at %s",
            self._grid.rows, self._grid.cols, seed_cell,
        )
        self._signals.publish("reset", seed=seed_cell)
        self._signals.publish(
            "forest_grew", cell=seed_cell, variant=self._forest.variant(seed_cell)
        )
        self._evaluate()
        self._signals.flush()

    # --- Cadences ---

    def grow(self) -> Cell | None:
        """Slow cadence: claim one frontier cell. None when inert or stalled."""
        if self.finished:
            return None
        cell = self._forest.grow_one(self._rng, self._fences.is_blocked)
        if cell is not None:
            self._signals.publish("forest_grew", cell=cell, variant=self._forest.variant(cell))
            self._signals.flush()
        return cell

    def pulse(self, now: float) -> None:
        """Fast cadence: fences, then trains, then win/lose."""
        promoted, expired = self._fences.tick(now)
        for seg in promoted:
            self._signals.publish(
                "fence_activated", segment=seg,
                expires_at=self._fences.expires_at(seg.cell, seg.orientation),
            )
        for seg in expired:
            self._signals.publish("fence_expired", segment=seg)

        for event in self._rails.tick(now, self._forest):
            if event.kind == "completed":
                self._signals.publish(
                    "train_completed", train=event.train, completed=event.completed
                )
            else:
                self._signals.publish(f"train_{event.kind}", train=event.train)

        self._evaluate()
        self._signals.flush()

    def _evaluate(self) -> None:
        if not self._won and self._rails.completed >= self._config.trains_to_win:
            self._won = True
            logger.info("scene won after %d trains", self._rails.completed)
            self._signals.publish("won", completed=self._rails.completed)
        if not self._lost and self._forest.is_full():
            self._lost = True
            logger.info("scene lost: forest covers all %d cells", self._grid.area)
            self._signals.publish("lost", forest=len(self._forest))

    # --- User actions ---

    def tap(self, cell: Cell, now: float) -> bool:
        """Apply the current build mode to *cell*."""
        if self.build_mode is BuildMode.FENCE:
            return self.place_fence(cell, now)
        return self.place_rail(cell, now)

    def toggle_orientation(self) -> Orientation:
        if self.fence_orientation is Orientation.HORIZONTAL:
            self.fence_orientation = Orientation.VERTICAL
        else:
            self.fence_orientation = Orientation.HORIZONTAL
        return self.fence_orientation

    def place_fence(
        self, cell: Cell, now: float, orientation: Orientation | None = None
    ) -> bool:
        if orientation is None:
            orientation = self.fence_orientation
        if self.finished:
            logger.debug("fence ignored: scene is over")
            return False
        if not self._fences.request_placement(cell, orientation, now):
            return False
        self._signals.publish("fence_requested", segment=FenceSegment(cell, orientation))
        self._signals.flush()
        return True

    def place_rail(self, cell: Cell, now: float) -> bool:
        if self.finished:
            logger.debug("rail ignored: scene is over")
            return False
        before = self._rails.train_on_row(cell.row)
        if not self._rails.place(cell, now, self._forest):
            return False
        self._signals.publish("rail_placed", cell=cell)
        spawned = self._rails.train_on_row(cell.row)
        if spawned is not None and spawned != before:
            self._signals.publish("train_spawned", train=spawned)
        self._signals.flush()
        return True

    # --- Queries ---

    def is_forest(self, cell: Cell) -> bool:
        return self._forest.contains(cell)

    def forest_size(self) -> int:
        return len(self._forest)

    def variants(self) -> dict[Cell, int]:
        return self._forest.variants()

    def frontier(self) -> frozenset[Cell]:
        return frozenset(self._forest.frontier(self._fences.is_blocked))

    def has_rail(self, cell: Cell) -> bool:
        return self._rails.has_rail(cell)

    def rails(self) -> frozenset[Cell]:
        return self._rails.rails()

    def trains(self) -> tuple[Train, ...]:
        return self._rails.trains()

    @property
    def trains_completed(self) -> int:
        return self._rails.completed

    def is_fence_pending(self, cell: Cell, orientation: Orientation) -> bool:
        return self._fences.is_pending(cell, orientation)

    def is_fence_active(self, cell: Cell, orientation: Orientation) -> bool:
        return self._fences.is_active(cell, orientation)

    def fence_progress(self, cell: Cell, orientation: Orientation, now: float) -> float:
        return self._fences.progress(cell, orientation, now)

    def is_blocked(self, a: Cell, b: Cell) -> bool:
        return self._fences.is_blocked(a, b)

    def pending_fences(self) -> tuple[PendingFence, ...]:
        return self._fences.pending()

    def active_fences(self) -> dict[FenceSegment, float]:
        return self._fences.active()

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "rows": self._grid.rows,
            "cols": self._grid.cols,
            "seed": self._seed,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
            "forest": self._forest.snapshot(),
            "fences": self._fences.snapshot(),
            "rails": self._rails.snapshot(),
            "won": self._won,
            "lost": self._lost,
            "build_mode": self.build_mode.value,
            "fence_orientation": self.fence_orientation.value,
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Replace the scene with *data*. On error the scene is left untouched."""
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        size = (data.get("rows"), data.get("cols"))
        if size != (self._grid.rows, self._grid.cols):
            raise SnapshotError(
                f"Grid mismatch: snapshot is {size[0]}x{size[1]}, "
                f"scene is {self._grid.rows}x{self._grid.cols}"
            )

        cfg = self._config
        forest = Forest(self._grid, cfg.variant_count)
        fences = FenceManager(self._grid, cfg.build_delay, cfg.fence_lifespan)
        rails = RailNetwork(self._grid, cfg.transit_time, cfg.retry_interval)
        try:
            seed = data["seed"]
            rng_state = _deserialize_rng_state(data["rng_state"])
            forest.restore(data["forest"])
            fences.restore(data["fences"])
            rails.restore(data["rails"])
            won = bool(data["won"])
            lost = bool(data["lost"])
            build_mode = BuildMode(data.get("build_mode", BuildMode.RAIL.value))
            orientation = Orientation(
                data.get("fence_orientation", Orientation.HORIZONTAL.value)
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc}") from exc

        try:
            self._rng.setstate(rng_state)
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc}") from exc
        self._seed = seed
        self._forest = forest
        self._fences = fences
        self._rails = rails
        self._won = won
        self._lost = lost
        self.build_mode = build_mode
        self.fence_orientation = orientation
        self._signals.discard()


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
