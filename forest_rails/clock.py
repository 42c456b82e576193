"""Clock - named periodic cadences fired against an injected time."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

CadenceHandler = Callable[[float], None]


@dataclass
class Cadence:
    """Recurring trigger. Fires every `interval` seconds after `origin`."""

    name: str
    interval: float
    handler: CadenceHandler
    origin: float | None = None
    fired: int = 0

    @property
    def next_at(self) -> float | None:
        if self.origin is None:
            return None
        # origin + n * interval, never accumulated.
        return self.origin + (self.fired + 1) * self.interval


class Clock:
    """Schedules cadences without owning a real timer.

    The host calls ``advance(now)`` from its own loop. Every firing that is
    due by ``now`` runs in timestamp order and receives its scheduled
    instant, so a late ``advance`` catches up exactly. Firings scheduled for
    the same instant run in registration order.
    """

    def __init__(self) -> None:
        self._cadences: list[Cadence] = []
        self._running = False
        self._now: float | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def now(self) -> float | None:
        """Instant of the last firing or start, None before the first start."""
        return self._now

    def add(self, name: str, interval: float, handler: CadenceHandler) -> Cadence:
        if interval <= 0:
            raise ValueError(f"Cadence {name!r} interval must be positive, got {interval}")
        if self.cadence(name) is not None:
            raise ValueError(f"Cadence {name!r} already registered")
        cadence = Cadence(name, interval, handler)
        if self._running:
            cadence.origin = self._now
        self._cadences.append(cadence)
        return cadence

    def cadence(self, name: str) -> Cadence | None:
        for cadence in self._cadences:
            if cadence.name == name:
                return cadence
        return None

    def start(self, now: float) -> None:
        """Schedule every cadence to first fire one interval after *now*."""
        self._now = now
        for cadence in self._cadences:
            cadence.origin = now
            cadence.fired = 0
        self._running = True

    def stop(self) -> None:
        self._running = False
        for cadence in self._cadences:
            cadence.origin = None
            cadence.fired = 0

    def advance(self, now: float) -> int:
        """Fire everything due by *now*. Returns the number of firings."""
        count = 0
        while self._running:
            due = self._next_due(now)
            if due is None:
                break
            at = due.next_at
            due.fired += 1
            self._now = at
            due.handler(at)
            count += 1
        return count

    def _next_due(self, now: float) -> Cadence | None:
        best: Cadence | None = None
        for cadence in self._cadences:
            at = cadence.next_at
            if at is None or at > now:
                continue
            if best is None or at < best.next_at:
                best = cadence
        return best
