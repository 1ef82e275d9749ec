"""Reference host application used to exercise composition end to end."""
from __future__ import annotations

from .application import Application
from .models import Cache, Collection, HelperTables, Task, TaskRun, singularize

__all__ = ["Application", "Cache", "Collection", "HelperTables", "Task", "TaskRun", "singularize"]
