"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag (where .gencompose/config is read from)."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path (default: current directory)",
    )


def add_manifest_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "manifest",
        type=str,
        help="Path to a composition manifest (YAML)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = ["add_json_flag", "add_repo_root_flag", "add_manifest_arg", "add_standard_flags"]
