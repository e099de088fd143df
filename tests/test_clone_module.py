"""Tests for :mod:`undostack.clone`."""

from __future__ import annotations

from undostack import clone
from undostack.observe import observe


def test_clone_shares_no_mutable_state():
    original = {"a": [1, {"b": 2}], "s": "text"}

    copied = clone(original)
    copied["a"][1]["b"] = 3

    assert original == {"a": [1, {"b": 2}], "s": "text"}
    assert copied["a"] is not original["a"]


def test_clone_unwraps_observed_values():
    calls = []
    observed = observe({"a": [1]}, lambda *args: calls.append(args))

    copied = clone(observed)
    copied["a"].append(2)

    assert type(copied) is dict
    assert type(copied["a"]) is list
    assert observed == {"a": [1]}
    assert calls == []


def test_clone_passes_primitives_through():
    assert clone(None) is None
    assert clone(5) == 5
    assert clone("s") == "s"
