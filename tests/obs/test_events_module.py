"""Tests for :mod:`undostack.obs.events`."""

from __future__ import annotations

import datetime as _dt

from undostack.obs.events import EventBus, utc_now


def test_event_bus_emit_and_history():
    bus = EventBus()
    event = bus.emit(level="info", msg="Test", action="record", extras={"index": 0})

    assert event.msg == "Test"
    assert event.extras == {"index": 0}
    history = list(bus.history())
    assert history == [event]


def test_event_bus_filter_by_action():
    bus = EventBus()
    first = bus.emit(level="info", msg="one", action="record")
    bus.emit(level="info", msg="two", action="undo")
    third = bus.emit(level="info", msg="three", action="record")

    assert bus.filter("record") == (first, third)
    assert bus.filter("redo") == ()


def test_utc_now_is_timezone_aware_iso_format():
    parsed = _dt.datetime.fromisoformat(utc_now())

    assert parsed.utcoffset() == _dt.timedelta(0)
