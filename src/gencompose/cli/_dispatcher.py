"""
Auto-discovery CLI dispatcher for gencompose.

Scans ``cli/commands/`` and registers each module as a subcommand.
Adding a command = adding a .py file there.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from gencompose.core.audit import configure_stdlib_logging


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Import every public module under cli/commands and collect its hooks."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"gencompose.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def _get_version() -> str:
    try:
        from gencompose import __version__
        return __version__
    except ImportError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="gencompose",
        description="Compose generator state into an application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging.level from config (e.g. DEBUG)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in discover_commands().items():
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    from gencompose.cli._utils import get_repo_root
    from gencompose.core.config import LoggingConfig

    try:
        cfg = LoggingConfig(repo_root=get_repo_root(args))
        level, log_file = cfg.level, cfg.file
    except (ValueError, OSError) as exc:
        # Config problems surface again, with context, inside the command.
        print(f"Warning: using default logging ({exc})", file=sys.stderr)
        level, log_file = "WARNING", None
    configure_stdlib_logging(level=args.log_level or level, log_path=log_file)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the gencompose CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "_func", None):
        parser.print_help()
        return 0

    _configure_logging(args)
    return int(args._func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
