"""Records held by the reference host application."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass
class Cache:
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class HelperTables:
    """Template helpers split by calling convention."""

    sync: Dict[str, Callable[..., Any]] = field(default_factory=dict)
    async_: Dict[str, Callable[..., Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class Task:
    name: str
    deps: Tuple[str, ...] = ()
    fn: Optional[Callable[["TaskRun"], Any]] = None


@dataclass(frozen=True)
class TaskRun:
    """Passed to a task function when it runs: the app building it and the task name."""

    app: Any
    name: str


@dataclass
class Collection:
    """A named group of views sharing creation options."""

    name: str
    inflection: str
    options: Dict[str, Any] = field(default_factory=dict)
    views: Dict[str, Any] = field(default_factory=dict)


def singularize(name: str) -> str:
    """Naive singular form used as the default collection inflection."""
    if len(name) > 1 and name.endswith("s"):
        return name[:-1]
    return name


__all__ = ["Cache", "HelperTables", "Task", "TaskRun", "Collection", "singularize"]
