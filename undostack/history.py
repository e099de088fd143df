"""Bounded linear snapshot history."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .config import DEFAULT_MAX_UNDOS, validate_max_undos


@dataclass(frozen=True)
class HistoryStatus:
    """Whether the history can currently move backwards or forwards."""

    undoable: bool = False
    redoable: bool = False


@dataclass
class RecordResult:
    """Bookkeeping produced by :meth:`SnapshotHistory.record`."""

    truncated: int = 0
    evicted: int = 0


@dataclass
class SnapshotHistory:
    """Ordered snapshots plus a cursor naming the current one.

    The history is linear: recording while the cursor is behind the newest
    snapshot discards the redo branch first.  At most ``max_depth`` snapshots
    are retained; the oldest are evicted first.
    """

    max_depth: int = DEFAULT_MAX_UNDOS
    snapshots: List[Any] = field(default_factory=list)
    index: int = -1

    def __post_init__(self) -> None:
        validate_max_undos(self.max_depth)

    def __len__(self) -> int:
        return len(self.snapshots)

    @property
    def empty(self) -> bool:
        return not self.snapshots

    def status(self) -> HistoryStatus:
        """Derive the status from the cursor and the snapshot count."""

        return HistoryStatus(
            undoable=self.index > 0,
            redoable=self.index <= len(self.snapshots) - 2,
        )

    def record(self, snapshot: Any) -> RecordResult:
        """Append ``snapshot`` after the cursor and advance onto it."""

        result = RecordResult()
        if self.index < len(self.snapshots) - 1:
            result.truncated = len(self.snapshots) - self.index - 1
            del self.snapshots[self.index + 1 :]
        self.snapshots.append(snapshot)
        self.index += 1
        while len(self.snapshots) > self.max_depth:
            self.snapshots.pop(0)
            self.index -= 1
            result.evicted += 1
        return result

    @property
    def current(self) -> Any:
        """Return the snapshot under the cursor."""

        if self.index < 0:
            raise IndexError("history is empty")
        return self.snapshots[self.index]

    def back(self) -> bool:
        """Move the cursor one step back; ``False`` when nothing precedes it."""

        if not self.status().undoable:
            return False
        self.index -= 1
        return True

    def forward(self) -> bool:
        """Move the cursor one step forward; ``False`` at the newest snapshot."""

        if not self.status().redoable:
            return False
        self.index += 1
        return True
