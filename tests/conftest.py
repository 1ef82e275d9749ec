import logging
import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'gencompose'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from gencompose.core.audit import reset_stdlib_logging_for_tests  # noqa: E402
from gencompose.core.config import clear_all_caches  # noqa: E402
from gencompose.core.host import Application  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """Drop GENCOMPOSE_* env leaks and cached config around every test."""
    for key in list(os.environ):
        if key.startswith("GENCOMPOSE_"):
            monkeypatch.delenv(key, raising=False)
    root_level = logging.getLogger().level
    clear_all_caches()
    yield
    clear_all_caches()
    reset_stdlib_logging_for_tests()
    logging.getLogger().setLevel(root_level)


@pytest.fixture
def app() -> Application:
    return Application("app")
