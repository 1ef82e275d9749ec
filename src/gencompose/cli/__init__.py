"""
gencompose CLI package.

Commands are auto-discovered from ``cli/commands/``: each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from ._args import add_json_flag, add_manifest_arg, add_repo_root_flag, add_standard_flags
from ._output import OutputFormatter
from ._utils import get_repo_root

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_manifest_arg",
    "add_standard_flags",
    "get_repo_root",
]
