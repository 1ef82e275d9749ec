"""Small helpers for normalizing list-like arguments."""
from __future__ import annotations

from typing import Any, List


def arrayify(value: Any) -> List[Any]:
    """Coerce ``value`` into a list.

    Falsy values become an empty list, lists and tuples are copied, and any
    other value (including a single string) becomes a one-element list.

    Example:
        >>> arrayify("foo")
        ['foo']
        >>> arrayify(None)
        []
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


__all__ = ["arrayify"]
