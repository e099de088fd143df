"""undostack package initialization.

This module exposes the undo/redo history manager together with the helpers
hosts need to work with the observed data graph it hands out.
"""

from .clone import clone
from .history import HistoryStatus
from .observe import DELETED, unwrap
from .stack import UndoStack

__all__ = ["DELETED", "HistoryStatus", "UndoStack", "clone", "unwrap"]
