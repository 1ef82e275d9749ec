"""Composition of generator state onto a target app.

Public API:
- compose(): start a composition session
- CompositionHandler: chainable data/options/engines/helpers/tasks/views
- GeneratorResolver, ByName, ByHandle: reference resolution
"""
from __future__ import annotations

from .handler import CompositionHandler, compose
from .refs import ByHandle, ByName, GeneratorRef, to_refs
from .resolver import GeneratorResolver
from .tasks import copy_task, copy_tasks
from .views import copy_views

__all__ = [
    "CompositionHandler",
    "compose",
    "ByName",
    "ByHandle",
    "GeneratorRef",
    "to_refs",
    "GeneratorResolver",
    "copy_task",
    "copy_tasks",
    "copy_views",
]
