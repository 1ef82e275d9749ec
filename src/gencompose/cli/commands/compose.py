"""
gencompose compose command.

SUMMARY: Compose a manifest's generators onto its app and print the result
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gencompose.cli import OutputFormatter, add_manifest_arg, add_standard_flags, get_repo_root
from gencompose.core.config import ComposeConfig
from gencompose.core.exceptions import ComposeError
from gencompose.core.manifest import load_manifest, run_manifest
from gencompose.core.utils.yaml_io import dump_yaml_string

SUMMARY = "Compose a manifest's generators onto its app and print the result"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_manifest_arg(parser)
    parser.add_argument(
        "--generators",
        nargs="+",
        metavar="NAME",
        help="Compose these generators instead of compose.generators",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        manifest = load_manifest(Path(args.manifest))
        if args.generators:
            manifest.generators = list(args.generators)
        result = run_manifest(manifest, default_operations=ComposeConfig(repo_root=repo_root).operations)
    except ComposeError as e:
        formatter.error(e, error_code="compose_error")
        return 1
    except ValueError as e:
        formatter.error(e, error_code="invalid_arguments")
        return 2

    if formatter.json_mode:
        formatter.success(result, "")
    else:
        formatter.text(
            f"Composed {', '.join(result['generators']) or '(none)'} "
            f"with {', '.join(result['operations']) or '(no operations)'}"
        )
        formatter.text(dump_yaml_string(result["app"]).rstrip())
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
