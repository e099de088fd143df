"""Observability helpers for undostack."""

from .events import Event, EventBus

__all__ = ["Event", "EventBus"]
