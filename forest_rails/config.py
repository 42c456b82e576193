"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for one forest-rails scene.

    Attributes:
        rows: Grid height in cells.
        cols: Grid width in cells.
        build_delay: Seconds between a fence request and the fence blocking.
        fence_lifespan: Seconds an active fence blocks before it expires.
        transit_time: Seconds a train takes to cross one rail cell.
        retry_interval: Seconds a blocked train waits before trying again.
        growth_interval: Cadence of forest growth, in seconds.
        pulse_interval: Cadence of fence/train/win-lose updates, in seconds.
        trains_to_win: Completed trains needed to win.
        variant_count: Number of forest sprite variants (numbered from 1).
    """

    rows: int = 10
    cols: int = 18
    build_delay: float = 0.5
    fence_lifespan: float = 10.0
    transit_time: float = 2.0
    retry_interval: float = 0.5
    growth_interval: float = 1.5
    pulse_interval: float = 0.05
    trains_to_win: int = 3
    variant_count: int = 4

    def __post_init__(self) -> None:
        for name in ("rows", "cols", "trains_to_win", "variant_count"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        for name in (
            "build_delay",
            "fence_lifespan",
            "transit_time",
            "retry_interval",
            "growth_interval",
            "pulse_interval",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @property
    def area(self) -> int:
        return self.rows * self.cols

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameConfig:
        """Build a config from a plain mapping. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
