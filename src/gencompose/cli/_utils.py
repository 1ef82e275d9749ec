"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from pathlib import Path


def get_repo_root(args: argparse.Namespace) -> Path:
    """Return ``--repo-root`` when given, otherwise the current directory."""
    raw = getattr(args, "repo_root", None)
    if raw:
        root = Path(raw).expanduser().resolve()
        if not root.is_dir():
            raise ValueError(f"Repository root does not exist: {root}")
        return root
    return Path.cwd().resolve()


__all__ = ["get_repo_root"]
