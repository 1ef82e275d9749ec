"""Generator references: a name to look up, or an already-resolved handle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from ..utils.sequences import arrayify


@dataclass(frozen=True)
class ByName:
    """Reference resolved through the registry's ``get_generator``."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class ByHandle:
    """Reference to a generator object used as-is."""

    generator: Any

    def __str__(self) -> str:
        return str(getattr(self.generator, "name", None) or repr(self.generator))


GeneratorRef = Union[ByName, ByHandle]


def to_ref(value: Any) -> GeneratorRef:
    """Tag a single entry: strings are names, anything else is a handle."""
    if isinstance(value, (ByName, ByHandle)):
        return value
    if isinstance(value, str):
        return ByName(value)
    return ByHandle(value)


def to_refs(values: Any) -> Tuple[GeneratorRef, ...]:
    """Normalize a name, handle, list of either, or nothing into refs.

    Example:
        >>> to_refs("a")
        (ByName(name='a'),)
        >>> to_refs(None)
        ()
    """
    return tuple(to_ref(v) for v in arrayify(values))


__all__ = ["ByName", "ByHandle", "GeneratorRef", "to_ref", "to_refs"]
