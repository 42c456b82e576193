"""Change notification for hosts that mirror simulation state.

The simulation queues signals while an operation runs and flushes them once
the operation has settled, so handlers always observe a consistent state.
"""
from __future__ import annotations

from typing import Any, Callable

SignalHandler = Callable[[str, dict[str, Any]], None]

ANY = "*"

SIGNALS = frozenset({
    "reset",
    "forest_grew",
    "fence_requested",
    "fence_activated",
    "fence_expired",
    "rail_placed",
    "train_spawned",
    "train_moved",
    "train_blocked",
    "train_completed",
    "won",
    "lost",
})


class SignalBus:
    """Queued publish/subscribe keyed by signal name.

    Subscribing to ``ANY`` receives every signal. Unknown names raise
    ``ValueError`` on both sides so typos fail loudly.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[SignalHandler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, name: str, handler: SignalHandler) -> None:
        _check_name(name, allow_any=True)
        self._handlers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: SignalHandler) -> None:
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, **payload: Any) -> None:
        _check_name(name, allow_any=False)
        self._queue.append((name, payload))

    def pending(self) -> list[str]:
        return [name for name, _ in self._queue]

    def flush(self) -> None:
        batch, self._queue = self._queue, []
        for name, payload in batch:
            targets = self._handlers.get(name, []) + self._handlers.get(ANY, [])
            for handler in targets:
                handler(name, payload)

    def discard(self) -> None:
        """Drop queued signals without delivering them."""
        self._queue = []


def _check_name(name: str, allow_any: bool) -> None:
    if name in SIGNALS or (allow_any and name == ANY):
        return
    raise ValueError(f"Unknown signal {name!r}")
