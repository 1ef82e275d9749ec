"""In-memory reference application.

``Application`` implements every capability the composition handler uses:
a generator registry, options, cached data, engines, helpers, tasks, view
collections, questions and plugins. Generators are themselves
``Application`` instances registered on a parent.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Set, Union

from ..exceptions import TaskNotFoundError
from ..utils.merge import deep_merge, get_path, set_path
from .models import Cache, Collection, HelperTables, Task, TaskRun, singularize

if TYPE_CHECKING:
    from ..composition.handler import CompositionHandler

logger = logging.getLogger(__name__)

_UNSET = object()


class Application:
    """A generator-capable app holding composable state."""

    def __init__(
        self,
        name: str = "app",
        *,
        parent: Optional["Application"] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.name = name
        self.parent = parent
        self.generators: Dict[str, Application] = {}
        self.options: Dict[str, Any] = dict(options or {})
        self.cache = Cache()
        self.engines: Dict[str, Any] = {}
        self.helpers = HelperTables()
        self.tasks: Dict[str, Task] = {}
        self.collections: Dict[str, Collection] = {}
        self.questions: Dict[str, Any] = {}
        self.plugins: Dict[str, Callable[..., Any]] = {}

    def __repr__(self) -> str:
        return f"Application(name={self.name!r})"

    # ---------------- Generators ----------------

    def register(
        self,
        name: str,
        configure: Union[Callable[["Application"], Any], "Application", None] = None,
    ) -> "Application":
        """Register a generator, optionally configuring it with a callback."""
        if isinstance(configure, Application):
            generator = configure
            generator.name = name
            generator.parent = self
        else:
            generator = Application(name, parent=self)
            if configure is not None:
                configure(generator)
        self.generators[name] = generator
        logger.debug("Registered generator %r on %r", name, self.name)
        return generator

    def get_generator(self, name: str) -> Optional["Application"]:
        """Look up a generator; dotted names walk nested generators."""
        current: Optional[Application] = self
        for part in name.split("."):
            if current is None:
                return None
            current = current.generators.get(part)
        return current

    def has_generator(self, name: str) -> bool:
        return self.get_generator(name) is not None

    def compose(self, names: Any = None, parent: Optional["Application"] = None) -> "CompositionHandler":
        from ..composition.handler import compose

        return compose(self, names, parent=parent)

    # ---------------- Options & data ----------------

    def option(self, key: Union[str, Mapping[str, Any]], value: Any = _UNSET) -> Any:
        """Set options from a mapping or ``(key, value)``; read with ``option(key)``."""
        if isinstance(key, Mapping):
            self.options = deep_merge(self.options, key, array_markers=False)
            return self
        if value is _UNSET:
            return get_path(self.options, key)
        set_path(self.options, key, value)
        return self

    def data(self, key: Union[str, Mapping[str, Any]], value: Any = _UNSET) -> Any:
        """Merge a mapping into ``cache.data`` or set one dotted key."""
        if isinstance(key, Mapping):
            self.cache.data = deep_merge(self.cache.data, key, array_markers=False)
            return self
        if value is _UNSET:
            return self.get_data(key)
        set_path(self.cache.data, key, value)
        return self

    def get_data(self, key: str, default: Any = None) -> Any:
        return get_path(self.cache.data, key, default)

    # ---------------- Engines & helpers ----------------

    def engine(self, ext: str, engine: Any = _UNSET) -> Any:
        ext = ext.lstrip(".")
        if engine is _UNSET:
            return self.engines.get(ext)
        self.engines[ext] = engine
        return self

    def helper(self, name: str, fn: Callable[..., Any]) -> "Application":
        self.helpers.sync[name] = fn
        return self

    def async_helper(self, name: str, fn: Callable[..., Any]) -> "Application":
        self.helpers.async_[name] = fn
        return self

    def register_helpers(self, table: Mapping[str, Callable[..., Any]]) -> "Application":
        self.helpers.sync.update(table or {})
        return self

    def register_async_helpers(self, table: Mapping[str, Callable[..., Any]]) -> "Application":
        self.helpers.async_.update(table or {})
        return self

    # ---------------- Tasks ----------------

    def task(
        self,
        name: str,
        deps: Union[Sequence[str], Callable[[TaskRun], Any], None] = None,
        fn: Optional[Callable[[TaskRun], Any]] = None,
    ) -> Task:
        """Define a task: ``task(name, fn)`` or ``task(name, deps, fn)``."""
        if callable(deps) and fn is None:
            deps, fn = None, deps
        if isinstance(deps, str):
            deps = [deps]
        record = Task(name=name, deps=tuple(deps or ()), fn=fn)
        self.tasks[name] = record
        return record

    def has_task(self, name: str) -> bool:
        return name in self.tasks

    def build(self, *names: str) -> List[str]:
        """Run tasks (default: ``"default"``) after their dependencies.

        Each task runs at most once per build. Returns the run order.
        """
        ran: List[str] = []
        visiting: Set[str] = set()

        def run(task_name: str) -> None:
            if task_name in ran or task_name in visiting:
                return
            record = self.tasks.get(task_name)
            if record is None:
                raise TaskNotFoundError(task_name, generator=self.name)
            visiting.add(task_name)
            for dep in record.deps:
                run(dep)
            if record.fn is not None:
                record.fn(TaskRun(app=self, name=task_name))
            ran.append(task_name)

        for task_name in names or ("default",):
            run(task_name)
        return ran

    # ---------------- Views ----------------

    @property
    def views(self) -> Dict[str, Dict[str, Any]]:
        return {name: collection.views for name, collection in self.collections.items()}

    def create(self, name: str, options: Optional[Mapping[str, Any]] = None) -> Collection:
        """Create (or reset) the view collection ``name``."""
        opts = dict(options or {})
        inflection = opts.pop("inflection", None) or singularize(name)
        collection = Collection(name=name, inflection=inflection, options=opts)
        self.collections[name] = collection
        return collection

    def _collection(self, name: str) -> Collection:
        try:
            return self.collections[name]
        except KeyError:
            raise KeyError(f'collection "{name}" does not exist; call create() first') from None

    def add_view(self, collection: str, key: str, view: Any) -> "Application":
        self._collection(collection).views[key] = view
        return self

    def add_views(self, collection: str, entries: Mapping[str, Any]) -> "Application":
        self._collection(collection).views.update(entries or {})
        return self

    def get_view(self, collection: str, key: str) -> Any:
        found = self.collections.get(collection)
        return None if found is None else found.views.get(key)

    # ---------------- Questions & plugins ----------------

    def question(self, key: str, value: Any = None) -> "Application":
        self.questions[key] = value if value is not None else {"message": key}
        return self

    def plugin(self, name: str, fn: Callable[..., Any]) -> "Application":
        self.plugins[name] = fn
        return self

    # ---------------- Snapshot ----------------

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly snapshot of the composable state."""
        return {
            "name": self.name,
            "options": self.options,
            "data": self.cache.data,
            "engines": sorted(self.engines),
            "helpers": {
                "sync": sorted(self.helpers.sync),
                "async": sorted(self.helpers.async_),
            },
            "tasks": {name: list(task.deps) for name, task in self.tasks.items()},
            "views": {
                name: {"inflection": collection.inflection, "views": collection.views}
                for name, collection in self.collections.items()
            },
            "questions": self.questions,
            "plugins": sorted(self.plugins),
        }


__all__ = ["Application"]
