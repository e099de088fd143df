"""Deep observation of in-place writes on nested data graphs."""

from .proxy import (
    DELETED,
    KeyFilter,
    ObservedDict,
    ObservedList,
    ObservedObject,
    WriteSink,
    is_composite,
    observe,
    unwrap,
)

__all__ = [
    "DELETED",
    "KeyFilter",
    "ObservedDict",
    "ObservedList",
    "ObservedObject",
    "WriteSink",
    "is_composite",
    "observe",
    "unwrap",
]
