"""
gencompose configuration management (YAML-only).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from gencompose.core.exceptions import ConfigError
from gencompose.core.utils.merge import deep_merge as _deep_merge
from gencompose.core.utils.yaml_io import iter_yaml_files, read_yaml
from gencompose.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "GENCOMPOSE_"
PROJECT_DIR_NAME = ".gencompose"


class ConfigManager:
    """Load and merge gencompose configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: GENCOMPOSE_*
    2. Project config: <repo_root>/.gencompose/config/*.yaml (alphabetical order)
    3. Bundled defaults: gencompose.data/config/*.yaml (alphabetical order)
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_DIR_NAME / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}", context={"path": str(path)})
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, object]]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[Union[str, object]] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                        context={"key": raw},
                    )
                return []
            if seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, object]], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                if strict:
                    raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
                continue
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, object]], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            if part is self.ARRAY_APPEND_MARKER:
                raise ConfigError("APPEND may only appear as the last key segment")
            if not isinstance(cur, dict):
                raise ConfigError("Environment override traverses a non-mapping value")
            candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            use_key = candidates.get(str(part), part)
            if not isinstance(cur.get(use_key), (dict, list)):
                cur[use_key] = {}
            cur = cur[use_key]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ConfigError("APPEND requires a list value")
            cur.append(value)
            return
        if not isinstance(cur, dict):
            raise ConfigError("Key assignment requires a mapping")
        candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[candidates.get(str(leaf), leaf)] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_config_uncached(self, strict: bool = True) -> Dict[str, Any]:
        """Merge bundled defaults, project config and env overrides (UNCACHED)."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg, strict=strict)
        return cfg

    def load_config(self, strict: bool = True) -> Dict[str, Any]:
        """Load configuration through the process cache.

        Returned dict should be treated as immutable.
        """
        from .cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root, strict=strict)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('logging.level')
            'WARNING'
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Any = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_DIR_NAME"]
