"""Engine - drives a Simulation on its growth and pulse cadences."""
from __future__ import annotations

import logging
import random
import time
from typing import Callable

from forest_rails.clock import Clock
from forest_rails.config import GameConfig
from forest_rails.simulation import Simulation

logger = logging.getLogger(__name__)

Hook = Callable[[Simulation], None]

GROWTH = "growth"
PULSE = "pulse"


class Engine:
    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._simulation = Simulation(config, seed=seed, rng=rng)
        cfg = self._simulation.config
        self._clock = Clock()
        self._clock.add(GROWTH, cfg.growth_interval, lambda now: self._simulation.grow())
        self._clock.add(PULSE, cfg.pulse_interval, self._simulation.pulse)
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = False

    @property
    def simulation(self) -> Simulation:
        return self._simulation

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def running(self) -> bool:
        return self._clock.running

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def start(self, now: float) -> None:
        """Reset the scene and schedule both cadences from *now*."""
        self._stop_requested = False
        self._simulation.reset()
        self._clock.start(now)
        logger.info("engine started at %.3f (seed=%d)", now, self._simulation.seed)
        for hook in self._start_hooks:
            hook(self._simulation)

    def stop(self) -> None:
        """Cancel both cadences. Scene state is kept as-is."""
        if not self._clock.running:
            return
        self._clock.stop()
        logger.info("engine stopped")
        for hook in self._stop_hooks:
            hook(self._simulation)

    def advance(self, now: float) -> int:
        return self._clock.advance(now)

    def run(self, seconds: float, start: float = 0.0, step: float | None = None) -> float:
        """Run on a simulated timeline until *seconds* pass or stop is requested.

        Returns the simulated instant the run ended at.
        """
        if step is None:
            step = self._simulation.config.pulse_interval
        self.start(start)
        now = start
        end = start + seconds
        while now < end and not self._stop_requested:
            now = min(end, now + step)
            self.advance(now)
        self.stop()
        return now

    def run_forever(
        self,
        time_fn: Callable[[], float] = time.monotonic,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        """Drive the scene in real time until ``request_stop()`` is called."""
        self.start(time_fn())
        dt = self._simulation.config.pulse_interval
        while not self._stop_requested:
            started = time_fn()
            self.advance(started)
            if self._stop_requested:
                break
            sleep_time = dt - (time_fn() - started)
            if sleep_time > 0:
                sleep_fn(sleep_time)
        self.stop()
