"""Domain-specific configuration for composition runs."""
from __future__ import annotations

from functools import cached_property
from typing import List

from gencompose.core.capabilities import OPERATION_CAPABILITIES
from gencompose.core.exceptions import ConfigError

from ..base import BaseDomainConfig


class ComposeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "compose"

    @cached_property
    def operations(self) -> List[str]:
        """Default operation order applied when a manifest names none."""
        ops = [str(op) for op in (self.section.get("operations") or [])]
        unknown = [op for op in ops if op not in OPERATION_CAPABILITIES]
        if unknown:
            raise ConfigError(
                f"Unknown compose operation(s) in config: {', '.join(unknown)}",
                context={"operations": unknown},
            )
        return ops


__all__ = ["ComposeConfig"]
