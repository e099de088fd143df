"""History journal primitives."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Iterable, List


def utc_now() -> str:
    """Return the current UTC time formatted as an ISO 8601 string."""

    return _dt.datetime.now(_dt.timezone.utc).isoformat()


@dataclass
class Event:
    """A single history transition stored in the event bus."""

    ts: str
    level: str
    msg: str
    action: str | None = None
    extras: dict | None = None


@dataclass
class EventBus:
    """Append-only in-memory journal of history transitions."""

    events: List[Event] = field(default_factory=list)

    def emit(
        self,
        *,
        level: str,
        msg: str,
        action: str | None = None,
        extras: dict | None = None,
    ) -> Event:
        """Create and store a new :class:`Event`."""

        event = Event(
            ts=utc_now(),
            level=level,
            msg=msg,
            action=action,
            extras=extras,
        )
        self.events.append(event)
        return event

    def history(self) -> Iterable[Event]:
        """Return the chronological event history."""

        return tuple(self.events)

    def filter(self, action: str) -> Iterable[Event]:
        """Return the events recorded for ``action`` in chronological order."""

        return tuple(event for event in self.events if event.action == action)
