from __future__ import annotations

from typing import Any, Dict, Mapping


class ComposeError(Exception):
    """Base exception for gencompose."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class CapabilityMissingError(ComposeError, TypeError):
    """Raised when the target app (or the registry) lacks what an operation needs.

    ``attribute=True`` names a required data attribute instead of a method.
    """

    def __init__(
        self,
        operation: str,
        method: str,
        *,
        owner: str = "app",
        attribute: bool = False,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("operation", operation)
        ctx.setdefault("method", method)
        if owner != "app":
            ctx.setdefault("owner", owner)
        if attribute:
            message = f'.{operation} expects a "{method}" attribute on "{owner}"'
        else:
            message = f'.{operation} expects a ".{method}()" method on "{owner}"'
        ComposeError.__init__(self, message, context=ctx)
        TypeError.__init__(self, message)
        self.operation = operation
        self.method = method
        self.owner = owner


class GeneratorNotFoundError(ComposeError, LookupError):
    """Raised when a generator name does not resolve via the registry."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx.setdefault("name", name)
        message = f'generator "{name}" is not registered'
        ComposeError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)
        self.name = name


class TaskNotFoundError(ComposeError, LookupError):
    """Raised when an explicitly requested task is missing on a generator."""

    def __init__(
        self,
        task: str,
        *,
        generator: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("task", task)
        if generator:
            ctx.setdefault("generator", generator)
        message = f'"{task}" not found in tasks'
        ComposeError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)
        self.task = task
        self.generator = generator


class ManifestError(ComposeError, ValueError):
    """Raised when a composition manifest cannot be loaded or validated."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ComposeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(ComposeError, ValueError):
    """Raised for malformed configuration sources."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ComposeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ComposeError",
    "CapabilityMissingError",
    "GeneratorNotFoundError",
    "TaskNotFoundError",
    "ManifestError",
    "ConfigError",
]
