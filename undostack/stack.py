"""Undo/redo tracking for a live, deeply nested data graph."""
from __future__ import annotations

import enum
import functools
import logging
from typing import Any, Callable, Optional, Tuple

from .clone import clone
from .config import default_max_undos
from .history import HistoryStatus, SnapshotHistory
from .obs.events import EventBus
from .observe import DELETED, KeyFilter, is_composite, observe

LOGGER = logging.getLogger(__name__)

ChangeCallback = Callable[[Any, Any, Any, Any], None]
StatusCallback = Callable[[HistoryStatus], None]

_UNSET = object()


class WriteOrigin(enum.Enum):
    """Where a write handled by the stack came from."""

    ASSIGN = "assign"
    WRITE = "write"
    NAVIGATE = "navigate"


class UndoStack:
    """Record every mutation of a live data graph as an undoable snapshot.

    Assigning :attr:`data` clones the value and installs an observed copy of
    it.  The host then mutates that copy in place; each write is recorded as a
    full snapshot in a bounded, linear history.  :meth:`undo` and :meth:`redo`
    install a freshly observed clone of the neighbouring snapshot, so the host
    must re-fetch the graph from ``on_change`` instead of holding on to it::

        >>> stack = UndoStack({"s": "a"})
        >>> stack.data["s"] = "ab"
        >>> stack.undo()
        >>> stack.data["s"]
        'a'

    Callbacks receive ``(data, value, key, target)``: ``on_set`` fires for
    every accepted write, ``on_change`` only when the shape of the graph may
    have changed (whole-graph assignment, navigation, deletions, ``None`` and
    composite values).  ``on_status`` receives a :class:`HistoryStatus` whenever
    :attr:`undoable` or :attr:`redoable` flips.
    """

    def __init__(
        self,
        data: Any = _UNSET,
        *,
        on_change: Optional[ChangeCallback] = None,
        on_set: Optional[ChangeCallback] = None,
        on_status: Optional[StatusCallback] = None,
        max_undos: Optional[int] = None,
        key_filter: Optional[KeyFilter] = None,
        paused: bool = False,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        if max_undos is None:
            max_undos = default_max_undos()
        self._history = SnapshotHistory(max_depth=max_undos)
        self._status = self._history.status()
        self._paused = paused
        self._generation = 0
        self._data: Any = None
        self.on_change = on_change
        self.on_set = on_set
        self.on_status = on_status
        self.key_filter = key_filter
        self.event_bus = event_bus
        if data is not _UNSET:
            self.data = data

    def __len__(self) -> int:
        return len(self._history)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return (
            f"{self.__class__.__name__}(stack_index={self.stack_index}, "
            f"length={self.length}, paused={self._paused})"
        )

    @property
    def data(self) -> Any:
        """The live, observed graph currently installed."""

        return self._data

    @data.setter
    def data(self, value: Any) -> None:
        self._install(value)
        self._update(None, None, None, origin=WriteOrigin.ASSIGN)

    @property
    def length(self) -> int:
        return len(self._history)

    @property
    def stack_index(self) -> int:
        return self._history.index

    @property
    def snapshots(self) -> Tuple[Any, ...]:
        """Copies of the stored snapshots, oldest first."""

        return tuple(clone(snapshot) for snapshot in self._history.snapshots)

    @property
    def max_undos(self) -> int:
        return self._history.max_depth

    @property
    def status(self) -> HistoryStatus:
        return self._history.status()

    @property
    def undoable(self) -> bool:
        return self._history.status().undoable

    @property
    def redoable(self) -> bool:
        return self._history.status().redoable

    @property
    def paused(self) -> bool:
        return self._paused

    def undo(self) -> None:
        """Step back one snapshot; does nothing when there is none."""

        if self._history.back():
            self._navigate("undo")

    def redo(self) -> None:
        """Step forward one snapshot; does nothing at the newest one."""

        if self._history.forward():
            self._navigate("redo")

    def pause(self) -> None:
        """Stop recording and announcing writes until :meth:`unpause`."""

        self._paused = True
        LOGGER.debug("History recording paused at index %d", self.stack_index)
        self._emit("pause", "History recording paused")

    def unpause(self, fire_change: bool = False) -> None:
        """Resume recording.

        With ``fire_change`` the change callback fires once with the current
        data so the host can pick up writes made while paused.  Nothing is
        recorded either way.
        """

        self._paused = False
        LOGGER.debug("History recording resumed at index %d", self.stack_index)
        self._emit("unpause", "History recording resumed", fire_change=fire_change)
        if fire_change:
            self._notify(self.on_change, None, None, None)

    def _install(self, value: Any) -> None:
        self._generation += 1
        sink = functools.partial(self._on_write, self._generation)
        self._data = observe(clone(value), sink, self.key_filter)

    def _on_write(self, generation: int, value: Any, key: Any, target: Any) -> None:
        if generation != self._generation:
            LOGGER.debug("Ignoring write to %r through a replaced graph", key)
            return
        self._update(value, key, target, origin=WriteOrigin.WRITE)

    def _navigate(self, action: str) -> None:
        LOGGER.debug("%s to snapshot %d of %d", action.capitalize(), self.stack_index, self.length)
        self._emit(action, f"Moved to snapshot {self.stack_index}")
        self._install(self._history.current)
        self._update(None, None, None, origin=WriteOrigin.NAVIGATE)

    def _update(self, value: Any, key: Any, target: Any, *, origin: WriteOrigin) -> None:
        if self._paused and not self._history.empty:
            self._refresh_status()
            return

        if origin is not WriteOrigin.NAVIGATE:
            self._record()
        self._refresh_status()

        if origin is not WriteOrigin.WRITE or value is None or value is DELETED or is_composite(value):
            self._notify(self.on_change, value, key, target)
        self._notify(self.on_set, value, key, target)

    def _record(self) -> None:
        result = self._history.record(clone(self._data))
        if result.truncated:
            LOGGER.debug("Discarded %d redo snapshot(s)", result.truncated)
            self._emit("truncate", f"Discarded {result.truncated} redo snapshot(s)", count=result.truncated)
        LOGGER.debug("Recorded snapshot %d of %d", self.stack_index, self.length)
        self._emit("record", f"Recorded snapshot {self.stack_index}")
        if result.evicted:
            LOGGER.debug("Evicted %d oldest snapshot(s)", result.evicted)
            self._emit("evict", f"Evicted {result.evicted} oldest snapshot(s)", count=result.evicted)

    def _refresh_status(self) -> None:
        status = self._history.status()
        if status == self._status:
            return
        self._status = status
        LOGGER.debug("Status changed: undoable=%s redoable=%s", status.undoable, status.redoable)
        if self.on_status is not None:
            self.on_status(status)

    def _notify(self, callback: Optional[ChangeCallback], value: Any, key: Any, target: Any) -> None:
        if callback is not None:
            callback(self._data, value, key, target)

    def _emit(self, action: str, msg: str, **extras: Any) -> None:
        if self.event_bus is None:
            return
        self.event_bus.emit(
            level="info",
            msg=msg,
            action=action,
            extras={"index": self.stack_index, "length": self.length, **extras},
        )


__all__ = ["ChangeCallback", "StatusCallback", "UndoStack", "WriteOrigin"]
