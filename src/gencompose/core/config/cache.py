"""Centralized configuration caching.

A single source of truth for loaded configuration across all domain
configs. Cache keys include the repo root, a fingerprint of GENCOMPOSE_*
environment variables and the project config file mtimes, so edits and
env changes are picked up without manual invalidation.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from gencompose.core.utils.yaml_io import iter_yaml_files

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path, strict: bool) -> str:
    from .manager import ENV_PREFIX, PROJECT_DIR_NAME

    env_items = sorted((k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith(ENV_PREFIX))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for p in iter_yaml_files(repo_root / PROJECT_DIR_NAME / "config"):
        try:
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((p.name, 0, 0))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:strict={strict}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, strict: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same inputs (treat as
    immutable).
    """
    from .manager import ConfigManager

    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, strict)
    if key not in _config_cache:
        manager = ConfigManager(repo_root=normalized_root)
        # Call the uncached loader to avoid recursion.
        _config_cache[key] = manager._load_config_uncached(strict=strict)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the configuration cache."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, strict: bool = True) -> bool:
    return _cache_key(_normalize_repo_root(repo_root), strict) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
