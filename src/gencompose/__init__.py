"""
gencompose - compose generator state into an application.

Copies options, data, engines, helpers, tasks and view collections from
named generators onto a target app, later generators winning on collisions.
"""

from gencompose.core.composition import CompositionHandler, compose
from gencompose.core.exceptions import (
    CapabilityMissingError,
    ComposeError,
    GeneratorNotFoundError,
    TaskNotFoundError,
)
from gencompose.core.host import Application

__version__ = "0.3.0"
__all__ = [
    "__version__",
    "compose",
    "CompositionHandler",
    "Application",
    "ComposeError",
    "CapabilityMissingError",
    "GeneratorNotFoundError",
    "TaskNotFoundError",
]
