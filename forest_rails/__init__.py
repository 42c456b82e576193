"""forest-rails - tick-driven forest, fence and train simulation."""

from forest_rails.clock import Cadence, Clock
from forest_rails.config import GameConfig
from forest_rails.engine import Engine
from forest_rails.fences import FenceManager
from forest_rails.forest import Forest
from forest_rails.grid import Grid, is_adjacent, normalize
from forest_rails.rails import RailNetwork, TrainEvent
from forest_rails.signals import SignalBus
from forest_rails.simulation import Simulation
from forest_rails.types import (
    BuildMode,
    Cell,
    Edge,
    FenceSegment,
    Orientation,
    PendingFence,
    SnapshotError,
    Train,
)

__all__ = [
    "Engine",
    "Simulation",
    "GameConfig",
    "Clock",
    "Cadence",
    "Grid",
    "normalize",
    "is_adjacent",
    "FenceManager",
    "Forest",
    "RailNetwork",
    "TrainEvent",
    "SignalBus",
    "BuildMode",
    "Cell",
    "Edge",
    "FenceSegment",
    "Orientation",
    "PendingFence",
    "Train",
    "SnapshotError",
]
