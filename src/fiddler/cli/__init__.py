"""
Fiddler command-line interface.

Commands are discovered from ``fiddler/cli/commands``: each module there
defines ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Shared pieces:
- _output: text/JSON rendering
- _args: common flags
- _utils: project root and config lookup
"""
from ._output import OutputFormatter
from ._args import add_json_flag, add_repo_root_flag, add_standard_flags
from ._utils import get_repo_root, load_build_config, load_config

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    "get_repo_root",
    "load_config",
    "load_build_config",
]
