"""Resolve generator references against a registry, lazily and in order."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from ..capabilities import GeneratorRegistry
from ..exceptions import GeneratorNotFoundError
from .refs import ByHandle, ByName, GeneratorRef, to_refs

logger = logging.getLogger(__name__)


class GeneratorResolver:
    """Turn generator references into generator objects.

    Nothing is cached: every call to :meth:`iter_generators` consults the
    registry again, so registrations made between two composition passes
    are observed by the later pass.
    """

    def __init__(self, registry: GeneratorRegistry) -> None:
        self.registry = registry

    def resolve(self, ref: GeneratorRef) -> Any:
        if isinstance(ref, ByHandle):
            return ref.generator
        generator = self.registry.get_generator(ref.name)
        if generator is None:
            raise GeneratorNotFoundError(ref.name)
        logger.debug("Resolved generator %r", ref.name)
        return generator

    def iter_generators(self, refs: Iterable[Any]) -> Iterator[Any]:
        """Yield resolved generators in list order.

        Raises GeneratorNotFoundError at the first unresolved name; entries
        before it have already been yielded.
        """
        for ref in to_refs(list(refs)):
            yield self.resolve(ref)


__all__ = ["GeneratorResolver", "ByName", "ByHandle"]
