"""Shared utilities (merging, key paths, argument normalization, YAML I/O)."""
from __future__ import annotations

from .merge import deep_merge, get_path, merge_arrays, scope_path, set_path
from .sequences import arrayify
from .yaml_io import dump_yaml_string, iter_yaml_files, read_yaml

__all__ = [
    "deep_merge",
    "merge_arrays",
    "get_path",
    "set_path",
    "scope_path",
    "arrayify",
    "read_yaml",
    "dump_yaml_string",
    "iter_yaml_files",
]
