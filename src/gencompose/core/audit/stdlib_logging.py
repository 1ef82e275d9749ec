from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_CONFIGURED_TARGET: str | None = None
_GENCOMPOSE_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Route gencompose log records to ``log_path`` or, without one, to stderr.

    Idempotent per-process: if already configured for the same target, only
    the level is updated. Stdout is never used so JSON output stays clean.
    """
    global _CONFIGURED_TARGET, _GENCOMPOSE_HANDLER

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _GENCOMPOSE_HANDLER is not None:
        _GENCOMPOSE_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the handler installed by a previous call when switching targets.
    if _GENCOMPOSE_HANDLER is not None:
        root.removeHandler(_GENCOMPOSE_HANDLER)
        _GENCOMPOSE_HANDLER.close()
        _GENCOMPOSE_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _GENCOMPOSE_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_stdlib_logging."""
    global _CONFIGURED_TARGET, _GENCOMPOSE_HANDLER
    if _GENCOMPOSE_HANDLER is not None:
        logging.getLogger().removeHandler(_GENCOMPOSE_HANDLER)
        _GENCOMPOSE_HANDLER.close()
    _CONFIGURED_TARGET = None
    _GENCOMPOSE_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
