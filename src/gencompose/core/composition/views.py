"""Copy view collections and their entries between apps."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

ViewFilter = Callable[[str, Any, Mapping[str, Any]], bool]


def accept_all(key: str, view: Any, views: Mapping[str, Any]) -> bool:
    return True


def collection_options(collection: Any) -> Dict[str, Any]:
    """Options used to re-create ``collection`` on another app."""
    options = dict(getattr(collection, "options", None) or {})
    inflection = getattr(collection, "inflection", None)
    if inflection:
        options["inflection"] = inflection
    return options


def copy_views(
    source: Any,
    target: Any,
    names: Sequence[str] = (),
    view_filter: Optional[ViewFilter] = None,
) -> Dict[str, int]:
    """Copy the named collections (default: all of them) from ``source``.

    A collection already present on ``target`` is reused as-is; a missing
    one is created from the source collection's inflection and options.
    Only entries accepted by ``view_filter(key, view, views)`` are added.

    Returns the number of entries copied per collection.
    """
    predicate = view_filter or accept_all
    selected = list(names) if names else list(source.views)

    counts: Dict[str, int] = {}
    for name in selected:
        views = source.views.get(name)
        if views is None:
            logger.debug("Source has no %r collection; skipping", name)
            continue

        if name not in target.collections:
            target.create(name, collection_options(source.collections[name]))

        picked = {key: view for key, view in views.items() if predicate(key, view, views)}
        target.add_views(name, picked)
        counts[name] = len(picked)
    return counts


__all__ = ["ViewFilter", "accept_all", "collection_options", "copy_views"]
