"""Tests for :mod:`undostack.history`."""

from __future__ import annotations

import pytest

from undostack.history import HistoryStatus, SnapshotHistory


def make_history(*snapshots, max_depth: int = 20) -> SnapshotHistory:
    history = SnapshotHistory(max_depth=max_depth)
    for snapshot in snapshots:
        history.record(snapshot)
    return history


def test_empty_history_has_no_cursor():
    history = SnapshotHistory()

    assert history.empty
    assert history.index == -1
    assert len(history) == 0
    assert history.status() == HistoryStatus(undoable=False, redoable=False)
    with pytest.raises(IndexError):
        history.current


def test_record_advances_cursor_linearly():
    history = make_history("a", "ab", "abc")

    assert history.snapshots == ["a", "ab", "abc"]
    assert history.index == 2
    assert history.current == "abc"
    assert history.status() == HistoryStatus(undoable=True, redoable=False)


def test_back_and_forward_stop_at_the_ends():
    history = make_history("a", "ab")

    assert history.back() is True
    assert history.current == "a"
    assert history.back() is False
    assert history.index == 0
    assert history.status() == HistoryStatus(undoable=False, redoable=True)

    assert history.forward() is True
    assert history.forward() is False
    assert history.current == "ab"


def test_record_after_back_truncates_redo_branch():
    history = make_history("a", "ab", "abc", "abcd")
    history.back()
    history.back()

    result = history.record("abz")

    assert result.truncated == 2
    assert result.evicted == 0
    assert history.snapshots == ["a", "ab", "abz"]
    assert history.index == 2


def test_record_evicts_oldest_beyond_max_depth():
    history = make_history(max_depth=3)
    results = [history.record(value) for value in ("a", "ab", "abc", "abcd", "abcde")]

    assert [result.evicted for result in results] == [0, 0, 0, 1, 1]
    assert history.snapshots == ["abc", "abcd", "abcde"]
    assert history.index == 2
    assert history.current == "abcde"


def test_none_snapshots_are_navigable():
    history = make_history(None, {"x": 1})

    assert history.back() is True
    assert history.current is None


@pytest.mark.parametrize("max_depth", [0, -5])
def test_history_rejects_non_positive_bound(max_depth):
    with pytest.raises(ValueError):
        SnapshotHistory(max_depth=max_depth)
