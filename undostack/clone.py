"""Deep-clone helper used to take history snapshots."""
from __future__ import annotations

import copy
from typing import Any

from .observe import unwrap


def clone(value: Any) -> Any:
    """Return a deep copy of ``value`` sharing no mutable state with it.

    Observed wrappers are unwrapped first, so the copy is always plain data.
    """

    return copy.deepcopy(unwrap(value))


__all__ = ["clone"]
