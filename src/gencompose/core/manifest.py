"""Declarative composition manifests.

A manifest is a YAML document describing generators and one composition::

    generators:
      a:
        options: {foo: aaa}
        tasks:
          foo: {}
          default: {deps: [foo]}
      b:
        options: {foo: bbb}
    compose:
      generators: [a, b]
      operations: [options, {name: tasks, tasks: [default]}]

Engines, helpers, plugins and task bodies cannot be expressed in YAML, so
they are declared by name and stand in as logging callables.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import yaml
from jsonschema import Draft202012Validator

from gencompose.data import read_yaml as read_data_yaml

from .composition.handler import CompositionHandler
from .exceptions import ManifestError
from .host import Application, TaskRun
from .utils.yaml_io import read_yaml

logger = logging.getLogger(__name__)

SCHEMA_FILE = "manifest.schema.yaml"


@dataclass
class Operation:
    name: str
    key: Optional[str] = None
    tasks: List[str] = field(default_factory=list)
    collections: List[str] = field(default_factory=list)
    include: List[str] = field(default_factory=list)


@dataclass
class Manifest:
    """A loaded manifest: the target app (with generators) and the composition."""

    app: Application
    generators: List[str]
    operations: List[Operation]
    parent: Optional[str] = None
    path: Optional[Path] = None


def validation_errors(payload: Any) -> List[str]:
    """Return schema violations for ``payload`` (empty when valid)."""
    schema = read_data_yaml("schemas", SCHEMA_FILE)
    validator = Draft202012Validator(schema)
    errors: List[str] = []
    for err in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        location = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{location}: {err.message}")
    return errors


def _declared(kind: str, owner: str, name: str) -> Callable[..., Any]:
    def declared(*args: Any, **kwargs: Any) -> None:
        if args and isinstance(args[0], TaskRun):
            logger.info("Running task %r on %r (declared by %r)", name, args[0].app.name, owner)
        else:
            logger.info("Invoked %s %r declared by %r", kind, name, owner)

    declared.__name__ = f"{kind}_{name}".replace(".", "_").replace("-", "_")
    declared.__qualname__ = declared.__name__
    return declared


def populate(app: Application, state: Mapping[str, Any]) -> Application:
    """Apply a manifest ``appState`` block to ``app``."""
    if state.get("options"):
        app.option(state["options"])
    if state.get("data"):
        app.data(state["data"])
    for ext in state.get("engines") or []:
        app.engine(ext, _declared("engine", app.name, ext))
    for helper in state.get("helpers") or []:
        app.helper(helper, _declared("helper", app.name, helper))
    for helper in state.get("async_helpers") or []:
        app.async_helper(helper, _declared("async_helper", app.name, helper))
    for task_name, task in (state.get("tasks") or {}).items():
        app.task(task_name, list((task or {}).get("deps") or []), _declared("task", app.name, task_name))
    for coll_name, coll in (state.get("collections") or {}).items():
        coll = coll or {}
        options = dict(coll.get("options") or {})
        if coll.get("inflection"):
            options["inflection"] = coll["inflection"]
        app.create(coll_name, options)
        app.add_views(coll_name, coll.get("views") or {})
    for key, question in (state.get("questions") or {}).items():
        app.question(key, question)
    for plugin in state.get("plugins") or []:
        app.plugin(plugin, _declared("plugin", app.name, plugin))
    for gen_name, gen_state in (state.get("generators") or {}).items():
        app.register(gen_name, lambda gen, s=gen_state: populate(gen, s or {}))
    return app


def _parse_operation(raw: Any) -> Operation:
    if isinstance(raw, str):
        return Operation(name=raw)
    return Operation(
        name=raw["name"],
        key=raw.get("key"),
        tasks=list(raw.get("tasks") or []),
        collections=list(raw.get("collections") or []),
        include=list(raw.get("include") or []),
    )


def parse_manifest(payload: Any, *, path: Optional[Path] = None) -> Manifest:
    """Validate ``payload`` and build the target app it describes."""
    errors = validation_errors(payload)
    if errors:
        where = f" in {path}" if path else ""
        raise ManifestError(
            f"Invalid manifest{where}: " + "; ".join(errors),
            context={"errors": errors, "path": str(path) if path else None},
        )

    app = populate(Application("app"), payload.get("app") or {})
    for gen_name, gen_state in payload["generators"].items():
        app.register(gen_name, lambda gen, s=gen_state: populate(gen, s or {}))

    compose = payload["compose"]
    return Manifest(
        app=app,
        generators=list(compose.get("generators") or []),
        operations=[_parse_operation(op) for op in compose.get("operations") or []],
        parent=compose.get("parent"),
        path=path,
    )


def load_manifest(path: Path) -> Manifest:
    """Read, validate and build a manifest file."""
    path = Path(path)
    try:
        payload = read_yaml(path, default=None, raise_on_error=True)
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {path}", context={"path": str(path)}) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestError(f"Cannot parse manifest {path}: {exc}", context={"path": str(path)}) from exc
    return parse_manifest(payload, path=path)


def _include_filter(patterns: Sequence[str]) -> Callable[[str, Any, Mapping[str, Any]], bool]:
    def accept(key: str, view: Any, views: Mapping[str, Any]) -> bool:
        return any(fnmatch(key, pat) for pat in patterns)

    return accept


def apply_operation(handler: CompositionHandler, op: Operation) -> None:
    if op.name == "data":
        handler.data(op.key)
    elif op.name == "options":
        handler.options(op.key)
    elif op.name == "tasks":
        handler.tasks(op.tasks or None)
    elif op.name == "views":
        view_filter = _include_filter(op.include) if op.include else None
        handler.views(op.collections or None, view_filter)
    else:
        getattr(handler, op.name)()


def run_manifest(manifest: Manifest, *, default_operations: Sequence[str] = ()) -> Dict[str, Any]:
    """Compose the manifest's generators onto its app and snapshot the result.

    ``default_operations`` is used when the manifest lists no operations.
    """
    registry = None
    if manifest.parent:
        registry = manifest.app.get_generator(manifest.parent)
        if registry is None:
            raise ManifestError(
                f'compose.parent "{manifest.parent}" is not a registered generator',
                context={"parent": manifest.parent},
            )

    operations = manifest.operations or [Operation(name=name) for name in default_operations]
    handler = CompositionHandler(manifest.app, manifest.generators, registry=registry)
    for op in operations:
        logger.debug("Applying %s to %s", op.name, manifest.generators)
        apply_operation(handler, op)

    return {
        "generators": list(manifest.generators),
        "operations": [op.name for op in operations],
        "app": manifest.app.to_dict(),
    }


__all__ = [
    "Manifest",
    "Operation",
    "validation_errors",
    "populate",
    "parse_manifest",
    "load_manifest",
    "apply_operation",
    "run_manifest",
]
