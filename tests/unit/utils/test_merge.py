from __future__ import annotations

from gencompose.core.utils.merge import deep_merge, get_path, merge_arrays, scope_path, set_path
from gencompose.core.utils.sequences import arrayify


def test_deep_merge_basic_dict_and_arrays() -> None:
    base = {"a": {"x": 1, "y": [1, 2]}, "b": [1, 2, 3], "c": 1}
    override = {"a": {"y": ["+", 3, 4]}, "b": ["=", 9], "c": 2, "d": "new"}
    merged = deep_merge(base, override)
    assert merged["a"] == {"x": 1, "y": [1, 2, 3, 4]}
    assert merged["b"] == [9]
    assert merged["c"] == 2
    assert merged["d"] == "new"


def test_deep_merge_without_array_markers_replaces_lists() -> None:
    merged = deep_merge({"items": [1, 2]}, {"items": ["+", 3]}, array_markers=False)
    assert merged == {"items": ["+", 3]}


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"a": {"b": 1}}
    override = {"a": {"c": 2}, "new": {"d": 3}}

    merged = deep_merge(base, override)
    merged["new"]["d"] = 99
    merged["a"]["b"] = 0

    assert base == {"a": {"b": 1}}
    assert override == {"a": {"c": 2}, "new": {"d": 3}}


def test_deep_merge_scalar_replaces_mapping() -> None:
    assert deep_merge({"a": {"b": 1}}, {"a": "flat"}) == {"a": "flat"}
    assert deep_merge({"a": "flat"}, {"a": {"b": 1}}) == {"a": {"b": 1}}


def test_deep_merge_none_override() -> None:
    assert deep_merge({"a": 1}, None) == {"a": 1}


def test_merge_arrays_empty_override_replaces_base() -> None:
    assert merge_arrays([1, 2], []) == []


def test_merge_arrays_markers() -> None:
    assert merge_arrays([1, 2], [3]) == [3]
    assert merge_arrays([1, 2], ["+", 3]) == [1, 2, 3]
    assert merge_arrays([1, 2], ["=", 3]) == [3]


def test_get_path() -> None:
    data = {"a": {"b": {"c": 1}}, "flat": 2}
    assert get_path(data, "a.b.c") == 1
    assert get_path(data, "a.b") == {"c": 1}
    assert get_path(data, "flat.x") is None
    assert get_path(data, "missing", "fallback") == "fallback"
    assert get_path(None, "a") is None


def test_set_path_creates_and_replaces_parents() -> None:
    data = {"a": 1}
    set_path(data, "a.b", 2)
    set_path(data, "x.y.z", 3)
    assert data == {"a": {"b": 2}, "x": {"y": {"z": 3}}}


def test_scope_path() -> None:
    assert scope_path("a.b.c", {"d": "e"}) == {"a": {"b": {"c": {"d": "e"}}}}
    assert scope_path("single", 1) == {"single": 1}


def test_arrayify() -> None:
    assert arrayify(None) == []
    assert arrayify("") == []
    assert arrayify("a") == ["a"]
    assert arrayify(("a", "b")) == ["a", "b"]
    value = ["a"]
    assert arrayify(value) == value and arrayify(value) is not value
