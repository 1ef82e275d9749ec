"""Capability protocols for composition targets and generators.

Each composition operation is keyed to one primary method on the target app
(``OPERATION_CAPABILITIES``). A few operations also write through extra
methods or mutate an attribute; those are listed in ``SUPPORTING_METHODS``
and ``SUPPORTING_ATTRIBUTES`` and checked right after the primary method.
Everything is checked before any generator is visited, so minimal fakes can
satisfy one category without implementing the others.

Looking up generators by name additionally needs ``get_generator`` on the
registry (the target app, or the ``parent`` given to ``compose``).
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .exceptions import CapabilityMissingError


@runtime_checkable
class GeneratorRegistry(Protocol):
    """Looks up registered generators by name."""

    def get_generator(self, name: str) -> Optional[Any]:
        """Return the generator registered as ``name`` or None."""
        ...


@runtime_checkable
class DataCapable(Protocol):
    def data(self, key: Any, value: Any = ...) -> Any: ...


@runtime_checkable
class OptionCapable(Protocol):
    def option(self, key: Any, value: Any = ...) -> Any: ...


@runtime_checkable
class EngineCapable(Protocol):
    engines: Dict[str, Any]

    def engine(self, ext: str, engine: Any) -> Any: ...


@runtime_checkable
class HelperCapable(Protocol):
    def helper(self, name: str, fn: Callable[..., Any]) -> Any: ...

    def register_helpers(self, table: Mapping[str, Callable[..., Any]]) -> Any: ...

    def register_async_helpers(self, table: Mapping[str, Callable[..., Any]]) -> Any: ...


@runtime_checkable
class TaskCapable(Protocol):
    def task(self, name: str, deps: Optional[Sequence[str]] = None, fn: Optional[Callable[..., Any]] = None) -> Any: ...

    def has_task(self, name: str) -> bool: ...


@runtime_checkable
class ViewCapable(Protocol):
    """Needs ``create``, ``add_views`` and a ``collections`` mapping."""

    collections: Mapping[str, Any]

    def create(self, name: str, options: Optional[Mapping[str, Any]] = None) -> Any: ...

    def add_views(self, name: str, entries: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class QuestionCapable(Protocol):
    def question(self, key: str, value: Any = None) -> Any: ...


@runtime_checkable
class PluginCapable(Protocol):
    def plugin(self, name: str, fn: Callable[..., Any]) -> Any: ...


# operation name -> method that must be callable on the target app
OPERATION_CAPABILITIES: Dict[str, str] = {
    "data": "data",
    "options": "option",
    "engines": "engine",
    "helpers": "helper",
    "tasks": "task",
    "views": "create",
    "questions": "question",
    "pipeline": "plugin",
}

# further members the operation touches on the target app
SUPPORTING_METHODS: Dict[str, Tuple[str, ...]] = {
    "helpers": ("register_helpers", "register_async_helpers"),
    "views": ("add_views",),
}

SUPPORTING_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    "engines": ("engines",),
    "views": ("collections",),
}


def has_capability(obj: Any, method: str) -> bool:
    """Return True when ``obj`` exposes a callable ``method``."""
    return callable(getattr(obj, method, None))


def require_capability(app: Any, operation: str) -> None:
    """Raise CapabilityMissingError unless ``app`` supports ``operation``."""
    method = OPERATION_CAPABILITIES[operation]
    if not has_capability(app, method):
        raise CapabilityMissingError(operation, method)
    for extra in SUPPORTING_METHODS.get(operation, ()):
        if not has_capability(app, extra):
            raise CapabilityMissingError(operation, extra)
    for attr in SUPPORTING_ATTRIBUTES.get(operation, ()):
        if getattr(app, attr, None) is None:
            raise CapabilityMissingError(operation, attr, attribute=True)


def require_registry(registry: Any, operation: str, *, owner: str = "app") -> None:
    """Raise CapabilityMissingError unless ``registry`` can look up generators."""
    if not has_capability(registry, "get_generator"):
        raise CapabilityMissingError(operation, "get_generator", owner=owner)


__all__ = [
    "GeneratorRegistry",
    "DataCapable",
    "OptionCapable",
    "EngineCapable",
    "HelperCapable",
    "TaskCapable",
    "ViewCapable",
    "QuestionCapable",
    "PluginCapable",
    "OPERATION_CAPABILITIES",
    "SUPPORTING_METHODS",
    "SUPPORTING_ATTRIBUTES",
    "has_capability",
    "require_capability",
    "require_registry",
]
