from __future__ import annotations

import logging
from pathlib import Path

from gencompose.core.audit import configure_stdlib_logging


def test_configure_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "compose.log"

    configure_stdlib_logging(level="info", log_path=log_path)
    logging.getLogger("gencompose.test").info("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "INFO gencompose.test: hello file" in log_path.read_text(encoding="utf-8")


def test_configure_is_idempotent_per_target() -> None:
    root = logging.getLogger()
    before = len(root.handlers)

    configure_stdlib_logging(level="WARNING")
    configure_stdlib_logging(level="DEBUG")

    assert len(root.handlers) == before + 1
    assert root.level == logging.DEBUG


def test_switching_target_replaces_handler(tmp_path: Path) -> None:
    root = logging.getLogger()
    before = len(root.handlers)

    configure_stdlib_logging(level="INFO")
    configure_stdlib_logging(level="INFO", log_path=tmp_path / "x.log")

    assert len(root.handlers) == before + 1
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_unknown_level_falls_back_to_info() -> None:
    configure_stdlib_logging(level="chatty")
    assert logging.getLogger().level == logging.INFO
