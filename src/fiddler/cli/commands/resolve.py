"""
Fiddler resolve command.

SUMMARY: Show the resolved dependencies of one component

Prints every transitive dependency of the component in resolution order.
Environment markers (vendor/php, vendor/ext-*, vendor/lib-*) are omitted.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import PurePosixPath

from fiddler.cli import OutputFormatter, add_standard_flags, get_repo_root, load_build_config
from fiddler.core.build import BuildOrchestrator
from fiddler.core.exceptions import FiddlerError

SUMMARY = "Show the resolved dependencies of one component"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "component",
        help="Component identifier (its directory relative to the project root)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Resolve one component."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        orchestrator = BuildOrchestrator(settings=load_build_config(repo_root))
        graph = orchestrator.load_graph(repo_root)
        component = PurePosixPath(args.component).as_posix()
        resolved = orchestrator.resolver.resolve(graph, component)
    except FiddlerError as e:
        formatter.error(e)
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "component": component,
                "dependencies": [manifest.to_dict() for manifest in resolved],
            }
        )
        return 0

    formatter.text(f"{component} ({len(resolved)} dependencies)")
    for manifest in resolved:
        formatter.text(f"  - {manifest.identifier}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
