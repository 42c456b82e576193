"""Unit tests for SignalBus."""
from __future__ import annotations

import pytest
from forest_rails import SignalBus
from forest_rails.signals import ANY


def test_subscribe_and_flush():
    bus = SignalBus()
    received = []

    bus.subscribe("rail_placed", lambda name, data: received.append((name, data)))
    bus.publish("rail_placed", cell=(0, 1))
    assert received == []

    bus.flush()
    assert received == [("rail_placed", {"cell": (0, 1)})]


def test_flush_empties_queue():
    bus = SignalBus()
    received = []
    bus.subscribe("won", lambda name, data: received.append(name))
    bus.publish("won", completed=3)
    bus.flush()
    bus.flush()
    assert received == ["won"]


def test_pending_lists_queued_names_in_order():
    bus = SignalBus()
    bus.publish("fence_requested", segment=None)
    bus.publish("fence_activated", segment=None, expires_at=1.0)
    assert bus.pending() == ["fence_requested", "fence_activated"]


def test_any_receives_every_signal_after_named_handlers():
    bus = SignalBus()
    order = []
    bus.subscribe(ANY, lambda name, data: order.append(("any", name)))
    bus.subscribe("lost", lambda name, data: order.append(("lost", name)))

    bus.publish("lost", forest=4)
    bus.publish("reset", seed=None)
    bus.flush()

    assert order == [("lost", "lost"), ("any", "lost"), ("any", "reset")]


def test_unknown_signal_names_raise():
    bus = SignalBus()
    with pytest.raises(ValueError, match="Unknown signal"):
        bus.publish("forest_shrank")
    with pytest.raises(ValueError, match="Unknown signal"):
        bus.subscribe("trian_moved", lambda name, data: None)


def test_unsubscribe():
    bus = SignalBus()
    received = []

    def handler(name, data):
        received.append(name)

    bus.subscribe("won", handler)
    bus.unsubscribe("won", handler)
    bus.unsubscribe("won", handler)  # second call is a no-op
    bus.publish("won", completed=3)
    bus.flush()
    assert received == []


def test_discard_drops_queue():
    bus = SignalBus()
    received = []
    bus.subscribe(ANY, lambda name, data: received.append(name))
    bus.publish("reset", seed=None)
    bus.discard()
    bus.flush()
    assert received == []
    assert bus.pending() == []
