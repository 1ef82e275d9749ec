"""
gencompose validate command.

SUMMARY: Validate a composition manifest against its schema
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gencompose.cli import OutputFormatter, add_json_flag, add_manifest_arg
from gencompose.core.exceptions import ManifestError
from gencompose.core.manifest import load_manifest

SUMMARY = "Validate a composition manifest against its schema"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_manifest_arg(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    path = Path(args.manifest)

    issues = []
    try:
        manifest = load_manifest(path)
    except ManifestError as e:
        issues = list(e.context.get("errors") or [str(e)])
        manifest = None

    result = {
        "valid": not issues,
        "manifest": str(path),
        "issues": issues,
    }
    if manifest is not None:
        result["generators"] = sorted(manifest.app.generators)

    if formatter.json_mode:
        formatter.json_output(result)
    else:
        if result["valid"]:
            formatter.text(f"✓ {path} is a valid manifest")
        else:
            formatter.text(f"✗ {path} is not a valid manifest")
        for issue in issues:
            formatter.text(f"  [error] {issue}")

    return 0 if result["valid"] else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
