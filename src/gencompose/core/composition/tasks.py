"""Copy task definitions, with their dependencies, between apps."""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Set

from ..exceptions import TaskNotFoundError

logger = logging.getLogger(__name__)


def copy_task(source: Any, target: Any, name: str, *, seen: Optional[Set[str]] = None) -> List[str]:
    """Define ``name`` and everything it depends on from ``source`` on ``target``.

    Dependencies are defined before their dependents (depth-first, declared
    order). A dependency the source does not define is skipped; the target
    is expected to supply it. ``seen`` makes each task copy at most once and
    keeps dependency cycles from recursing forever.

    Returns the task names defined on ``target`` in definition order.
    """
    if seen is None:
        seen = set()
    if name in seen:
        return []
    seen.add(name)

    task = source.tasks.get(name)
    if task is None:
        logger.debug("Dependency %r is not defined on source; leaving it to target", name)
        return []

    copied: List[str] = []
    for dep in task.deps:
        copied.extend(copy_task(source, target, dep, seen=seen))
    target.task(task.name, list(task.deps), task.fn)
    copied.append(task.name)
    return copied


def copy_tasks(source: Any, target: Any, names: Sequence[str] = ()) -> List[str]:
    """Copy the named tasks (or every task when ``names`` is empty).

    All explicitly requested names are checked before anything is copied,
    so a missing task leaves ``target`` unchanged for this source.
    """
    if names:
        for name in names:
            if not source.has_task(name):
                raise TaskNotFoundError(name, generator=getattr(source, "name", None))
        requested = list(names)
    else:
        requested = list(source.tasks)

    seen: Set[str] = set()
    copied: List[str] = []
    for name in requested:
        copied.extend(copy_task(source, target, name, seen=seen))
    return copied


__all__ = ["copy_task", "copy_tasks"]
