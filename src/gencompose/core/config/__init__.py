"""Configuration loading: bundled defaults, project YAML, env overrides."""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config
from .domains import ComposeConfig, LoggingConfig
from .manager import ENV_PREFIX, ConfigManager

__all__ = [
    "ConfigManager",
    "ENV_PREFIX",
    "BaseDomainConfig",
    "ComposeConfig",
    "LoggingConfig",
    "get_cached_config",
    "clear_all_caches",
]
