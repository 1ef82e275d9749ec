"""Composition handler: merge state from named generators into an app.

Usage::

    handler = CompositionHandler(app, ["a", "b", "c"])
    handler.options().data().helpers().views()

Every operation resolves the bound generator list again, applies its
merge strategy, and returns the handler for chaining. Later generators win
when keys collide.

Failures are raised synchronously. What is left on the app depends on the
operation:

- ``data``, ``options`` and ``engines`` accumulate across all generators
  and write once at the end, so a failure writes nothing.
- ``iterator``, ``helpers``, ``tasks``, ``views``, ``questions`` and
  ``pipeline`` write per generator, so copies made for generators before
  the failing one are kept.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from ..capabilities import GeneratorRegistry, require_capability, require_registry
from ..utils.merge import deep_merge, scope_path
from ..utils.sequences import arrayify
from .refs import ByName, to_refs
from .resolver import GeneratorResolver
from .tasks import copy_tasks
from .views import ViewFilter, copy_views

logger = logging.getLogger(__name__)

MergeFn = Callable[[Mapping[str, Any], Mapping[str, Any]], Dict[str, Any]]
IteratorFn = Callable[[Any, Any], Any]

_MISSING = object()


def _merge_state(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    # Generator state is plain data: lists replace, no config array markers.
    return deep_merge(base, override, array_markers=False)


class CompositionHandler:
    """Compose state from generators onto ``app``.

    Args:
        app: Target application receiving merged state.
        generators: Generator names and/or generator objects, in precedence
            order (last wins). A single value or None is accepted.
        registry: Where names are looked up. Defaults to ``app`` itself;
            pass a parent app to compose generators registered elsewhere.
        merge: Deep merge used for data and options.
    """

    def __init__(
        self,
        app: Any,
        generators: Any = None,
        *,
        registry: Optional[GeneratorRegistry] = None,
        merge: MergeFn = _merge_state,
    ) -> None:
        self.app = app
        self.generators: Tuple[Any, ...] = tuple(arrayify(generators))
        self.registry = registry if registry is not None else app
        self._merge = merge

    def __repr__(self) -> str:
        return f"CompositionHandler(generators={list(self.generators)!r})"

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def _iter(self, operation: str, names: Any = None) -> Iterator[Any]:
        refs = to_refs(self.generators if names is None else names)
        if any(isinstance(ref, ByName) for ref in refs):
            owner = "app" if self.registry is self.app else "parent"
            require_registry(self.registry, operation, owner=owner)
        return GeneratorResolver(self.registry).iter_generators(refs)

    def iterator(self, names: Any, fn: Optional[IteratorFn] = None) -> "CompositionHandler":
        """Invoke ``fn(generator, app)`` for each generator, in order.

        ``names`` may be omitted (``iterator(fn)``) to use the bound list, or
        given to iterate a different set of generators::

            handler.iterator(lambda gen, app: app.data(gen.cache.data))
            handler.iterator(["d", "e"], lambda gen, app: ...)
        """
        if fn is None:
            if not callable(names):
                raise TypeError("iterator expects a function")
            fn, names = names, None
        for generator in self._iter("iterator", names):
            fn(generator, self.app)
        return self

    # ------------------------------------------------------------------
    # Whole-merge categories
    # ------------------------------------------------------------------

    def _collect(self, operation: str, read: Callable[[Any], Any]) -> Tuple[Any, int]:
        acc: Any = _MISSING
        count = 0
        for generator in self._iter(operation):
            count += 1
            value = read(generator)
            if value is None:
                continue
            if isinstance(value, Mapping) and (acc is _MISSING or isinstance(acc, Mapping)):
                acc = self._merge({} if acc is _MISSING else acc, value)
            else:
                acc = value
        return acc, count

    def data(self, key: Optional[str] = None) -> "CompositionHandler":
        """Merge each generator's cached data onto ``app.cache.data``.

        With ``key`` (a dotted path) only that sub-tree is read from each
        generator and written back at the same path on ``app``.
        """
        require_capability(self.app, "data")
        if key:
            merged, count = self._collect("data", lambda gen: gen.get_data(key))
        else:
            merged, count = self._collect("data", lambda gen: gen.cache.data)
        if merged is _MISSING:
            return self
        self.app.data(scope_path(key, merged) if key else merged)
        logger.debug("Composed data%s from %d generator(s)", f" at {key!r}" if key else "", count)
        return self

    def options(self, key: Optional[str] = None) -> "CompositionHandler":
        """Merge each generator's options onto ``app.options``.

        Example::

            a.option("foo", "a")
            b.option("foo", "b")
            app.compose(["a", "b"]).options()
            app.options  # {"foo": "b"}
        """
        require_capability(self.app, "options")
        if key:
            merged, count = self._collect("options", lambda gen: gen.option(key))
        else:
            merged, count = self._collect("options", lambda gen: gen.options)
        if merged is _MISSING:
            return self
        self.app.option(scope_path(key, merged) if key else merged)
        logger.debug("Composed options%s from %d generator(s)", f" at {key!r}" if key else "", count)
        return self

    def engines(self) -> "CompositionHandler":
        """Shallow-merge each generator's engines into ``app.engines``."""
        require_capability(self.app, "engines")
        engines: Dict[str, Any] = {}
        for generator in self._iter("engines"):
            engines.update(generator.engines or {})
        self.app.engines.update(engines)
        return self

    # ------------------------------------------------------------------
    # Per-generator copies
    # ------------------------------------------------------------------

    def helpers(self) -> "CompositionHandler":
        """Register each generator's sync and async helpers on ``app``."""
        require_capability(self.app, "helpers")
        for generator in self._iter("helpers"):
            self.app.register_helpers(generator.helpers.sync)
            self.app.register_async_helpers(generator.helpers.async_)
        return self

    def tasks(self, names: Any = None) -> "CompositionHandler":
        """Copy tasks, and the tasks they depend on, onto ``app``.

        ``names`` is a task name or list of names; omitted means every task
        of each generator. A requested name missing on a generator raises
        TaskNotFoundError before anything is copied from that generator.
        """
        require_capability(self.app, "tasks")
        requested: Sequence[str] = arrayify(names)
        for generator in self._iter("tasks"):
            copied = copy_tasks(generator, self.app, requested)
            logger.debug("Copied tasks %s from %r", copied, getattr(generator, "name", generator))
        return self

    def views(self, names: Any = None, view_filter: Optional[ViewFilter] = None) -> "CompositionHandler":
        """Copy view collections and their views onto ``app``.

        Args:
            names: Collection names to copy; all collections when omitted.
                A function passed here is used as ``view_filter``.
            view_filter: Called as ``view_filter(key, view, views)``;
                returning False leaves that view behind.
        """
        require_capability(self.app, "views")
        if callable(names):
            view_filter, names = names, None
        selected: Sequence[str] = arrayify(names)
        for generator in self._iter("views"):
            copy_views(generator, self.app, selected, view_filter)
        return self

    def questions(self) -> "CompositionHandler":
        """Copy prompt questions from each generator onto ``app``."""
        require_capability(self.app, "questions")
        for generator in self._iter("questions"):
            for key, question in (generator.questions or {}).items():
                self.app.question(key, question)
        return self

    def pipeline(self) -> "CompositionHandler":
        """Copy pipeline plugins from each generator onto ``app``."""
        require_capability(self.app, "pipeline")
        for generator in self._iter("pipeline"):
            for name, plugin in (generator.plugins or {}).items():
                self.app.plugin(name, plugin)
        return self


def compose(
    app: Any,
    generators: Any = None,
    *,
    parent: Optional[GeneratorRegistry] = None,
) -> CompositionHandler:
    """Start a composition of ``generators`` onto ``app``.

    Names are looked up on ``parent`` when given, otherwise on ``app``.
    """
    return CompositionHandler(app, generators, registry=parent)


__all__ = ["CompositionHandler", "compose"]
