"""Observed container wrappers.

A wrapper stands in for a raw ``dict``, ``list`` or plain attribute object and
reports every in-place write to a single sink as ``sink(value, key, target)``,
where ``target`` is the raw container that owns ``key``.  Nested containers are
wrapped lazily on read with the same sink, so a write at any depth reaches it.

Values are always unwrapped before they are stored, which keeps the raw graph
free of wrappers and lets :func:`copy.deepcopy` snapshot it directly.
"""
from __future__ import annotations

import copy
import enum
import operator
import types
from collections.abc import Mapping, MutableMapping, MutableSequence
from typing import Any, Callable, Iterator, Optional

WriteSink = Callable[[Any, Any, Any], None]
KeyFilter = Callable[[Any], bool]


class _Deleted:
    """Marker reported as the written value when a key is removed."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DELETED"

    def __copy__(self) -> "_Deleted":
        return self

    def __deepcopy__(self, memo: dict) -> "_Deleted":
        return self


DELETED = _Deleted()


def unwrap(value: Any) -> Any:
    """Return the raw object behind an observed wrapper."""

    if isinstance(value, _Observed):
        return object.__getattribute__(value, "_raw")
    return value


def _is_record(value: Any) -> bool:
    if isinstance(value, (type, types.ModuleType, enum.Enum)) or callable(value):
        return False
    return hasattr(value, "__dict__")


def is_composite(value: Any) -> bool:
    """Return ``True`` when ``value`` is a container rather than a scalar leaf."""

    value = unwrap(value)
    if isinstance(value, (str, bytes, bytearray)):
        return False
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return True
    return _is_record(value)


def observe(value: Any, sink: WriteSink, key_filter: Optional[KeyFilter] = None) -> Any:
    """Wrap ``value`` so writes anywhere in its graph are reported to ``sink``.

    Mappings, lists and plain attribute objects are wrapped.  Anything else,
    including ``None``, strings and tuples, is returned unchanged since it
    cannot be mutated in place.
    """

    value = unwrap(value)
    if isinstance(value, MutableMapping):
        return ObservedDict(value, sink, key_filter)
    if isinstance(value, MutableSequence) and not isinstance(value, bytearray):
        return ObservedList(value, sink, key_filter)
    if _is_record(value):
        return ObservedObject(value, sink, key_filter)
    return value


class _Observed:
    __slots__ = ("_raw", "_sink", "_key_filter")

    def __init__(self, raw: Any, sink: WriteSink, key_filter: Optional[KeyFilter] = None) -> None:
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_sink", sink)
        object.__setattr__(self, "_key_filter", key_filter)

    def _filtered(self, key: Any) -> bool:
        return self._key_filter is not None and bool(self._key_filter(key))

    def _wrap(self, key: Any, value: Any) -> Any:
        if self._filtered(key):
            return value
        return observe(value, self._sink, self._key_filter)

    def _report(self, key: Any, value: Any) -> None:
        if not self._filtered(key):
            self._sink(value, key, self._raw)

    def __eq__(self, other: object) -> bool:
        return self._raw == unwrap(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"

    def __copy__(self) -> Any:
        return copy.copy(self._raw)

    def __deepcopy__(self, memo: dict) -> Any:
        return copy.deepcopy(self._raw, memo)


class ObservedDict(_Observed, MutableMapping):
    """Mapping wrapper reporting item assignment and deletion."""

    __slots__ = ()
    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, key: Any) -> Any:
        return self._wrap(key, self._raw[key])

    def __setitem__(self, key: Any, value: Any) -> None:
        value = unwrap(value)
        self._raw[key] = value
        self._report(key, value)

    def __delitem__(self, key: Any) -> None:
        del self._raw[key]
        self._report(key, DELETED)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._raw)

    def __len__(self) -> int:
        return len(self._raw)

    def __contains__(self, key: object) -> bool:
        return key in self._raw

    def get(self, key: Any, default: Any = None) -> Any:
        if key in self._raw:
            return self[key]
        return default

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self._raw:
            self[key] = default
        return self[key]

    def pop(self, key: Any, *default: Any) -> Any:
        """Remove ``key`` and return its raw value, detached from the graph."""

        if key not in self._raw:
            if default:
                return default[0]
            raise KeyError(key)
        value = self._raw[key]
        del self[key]
        return value

    def popitem(self) -> tuple[Any, Any]:
        try:
            key = next(iter(self._raw))
        except StopIteration:
            raise KeyError("popitem(): dictionary is empty") from None
        return key, self.pop(key)

    def copy(self) -> Any:
        return copy.copy(self._raw)


class ObservedList(_Observed, MutableSequence):
    """List wrapper reporting positional writes, insertions and deletions.

    Keys are reported as non-negative positions, or as the ``slice`` for slice
    assignment.  Positions are never matched against the key filter.
    """

    __slots__ = ()
    __hash__ = None  # type: ignore[assignment]

    def _filtered(self, key: Any) -> bool:
        return False

    def _position(self, index: Any) -> int:
        index = operator.index(index)
        if index < 0:
            index += len(self._raw)
        return index

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self._raw)))]
        index = self._position(index)
        return self._wrap(index, self._raw[index])

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            items = [unwrap(item) for item in value]
            self._raw[index] = items
            self._report(index, items)
            return
        index = self._position(index)
        value = unwrap(value)
        self._raw[index] = value
        self._report(index, value)

    def __delitem__(self, index: Any) -> None:
        if not isinstance(index, slice):
            index = self._position(index)
        del self._raw[index]
        self._report(index, DELETED)

    def __len__(self) -> int:
        return len(self._raw)

    def insert(self, index: int, value: Any) -> None:
        size = len(self._raw)
        index = operator.index(index)
        position = max(size + index, 0) if index < 0 else min(index, size)
        value = unwrap(value)
        self._raw.insert(position, value)
        self._report(position, value)

    def pop(self, index: int = -1) -> Any:
        """Remove the item at ``index`` and return it raw, detached from the graph."""

        index = self._position(index)
        value = self._raw[index]
        del self[index]
        return value

    def copy(self) -> Any:
        return copy.copy(self._raw)

    def sort(self, *, key: Callable[[Any], Any] | None = None, reverse: bool = False) -> None:
        """Sort in place, reported as a single slice assignment."""

        self[:] = sorted(self._raw, key=key, reverse=reverse)


class ObservedObject(_Observed):
    """Attribute wrapper for plain objects such as dataclass instances."""

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        return self._wrap(name, getattr(self._raw, name))

    def __setattr__(self, name: str, value: Any) -> None:
        value = unwrap(value)
        setattr(self._raw, name, value)
        self._report(name, value)

    def __delattr__(self, name: str) -> None:
        delattr(self._raw, name)
        self._report(name, DELETED)

    def __dir__(self) -> list[str]:
        return dir(self._raw)

    def __hash__(self) -> int:
        return hash(self._raw)
