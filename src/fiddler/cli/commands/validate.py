"""
Fiddler validate command.

SUMMARY: Validate manifests, the package index and every dependency reference

Loads the full graph and resolves every component without writing anything.
"""

from __future__ import annotations

import argparse
import sys

from fiddler.cli import OutputFormatter, add_standard_flags, get_repo_root, load_build_config
from fiddler.core.build import BuildOrchestrator
from fiddler.core.exceptions import FiddlerError

SUMMARY = "Validate manifests, the package index and every dependency reference"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only output errors, no success messages",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Validate the project."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        orchestrator = BuildOrchestrator(settings=load_build_config(repo_root))
        graph = orchestrator.load_graph(repo_root)
        targets = graph.build_targets()
        for identifier in targets:
            orchestrator.resolver.resolve(graph, identifier)
    except FiddlerError as e:
        formatter.error(e)
        return 1

    if formatter.json_mode:
        formatter.success(
            {"components": targets, "packages": len(graph)},
            "",
            status="valid",
        )
    elif not args.quiet:
        formatter.text(f"✅ {len(targets)} component(s) valid, {len(graph)} graph entries")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
