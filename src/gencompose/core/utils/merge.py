"""Canonical deep merge utilities.

Single source of truth for dictionary merging in gencompose. Both the
configuration layers and the composition operations import from here.

Features:
- Recursive dictionary merging that never mutates its inputs
- Optional array markers (configuration layers only):
  - Default: replace array entirely
  - Prefix with "+": append to existing array
  - Prefix with "=": explicit replace (same as default)
- Dotted key-path access (``"a.b.c"``) for scoped reads and writes
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, MutableMapping


def deep_merge(
    base: Mapping[str, Any],
    override: Mapping[str, Any] | None,
    *,
    array_markers: bool = True,
) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)
        array_markers: Honor ``"+"``/``"="`` list markers. Composed
            generator state passes ``False`` so lists are plain values.

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if key in result and isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value, array_markers=array_markers)
        elif array_markers and isinstance(current, list) and isinstance(value, list):
            result[key] = merge_arrays(current, value)
        elif isinstance(value, Mapping):
            # Copy so later merges into the result never reach back into a source.
            result[key] = deep_merge({}, value, array_markers=array_markers)
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Supports special prefixes in the first element:
    - "+" : Append override items (excluding prefix) to base
    - "=" : Replace base with override items (excluding prefix)
    - No prefix: Replace base entirely with override

    Example:
        >>> merge_arrays([1, 2], [3, 4])
        [3, 4]
        >>> merge_arrays([1, 2], ["+", 3, 4])
        [1, 2, 3, 4]
        >>> merge_arrays([1, 2], ["=", 3, 4])
        [3, 4]
    """
    if not override:
        return list(override)
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


def get_path(obj: Mapping[str, Any] | None, key: str, default: Any = None) -> Any:
    """Read a value by dot-notation key.

    Example:
        >>> get_path({"a": {"b": 1}}, "a.b")
        1
        >>> get_path({"a": {"b": 1}}, "a.x", "fallback")
        'fallback'
    """
    current: Any = obj
    for part in key.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return default
    return current


def set_path(obj: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Write ``value`` at a dot-notation key, creating parents as needed.

    Non-mapping values found along the path are replaced by dicts.
    """
    parts = key.split(".")
    current = obj
    for part in parts[:-1]:
        nxt = current.get(part)
        if not isinstance(nxt, MutableMapping):
            nxt = {}
            current[part] = nxt
        current = nxt
    current[parts[-1]] = value


def scope_path(key: str, value: Any) -> Dict[str, Any]:
    """Wrap ``value`` in nested dicts following a dot-notation key.

    Example:
        >>> scope_path("a.b", 1)
        {'a': {'b': 1}}
    """
    result: Dict[str, Any] = {}
    set_path(result, key, value)
    return result


__all__ = ["deep_merge", "merge_arrays", "get_path", "set_path", "scope_path"]
