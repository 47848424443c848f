"""
Fiddler list command.

SUMMARY: List components and installed packages in the dependency graph
"""

from __future__ import annotations

import argparse
import sys

from fiddler.cli import OutputFormatter, add_standard_flags, get_repo_root, load_build_config
from fiddler.core.build import BuildOrchestrator
from fiddler.core.exceptions import FiddlerError

SUMMARY = "List components and installed packages in the dependency graph"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--components-only",
        action="store_true",
        help="Only list buildable components (skip vendor/ packages)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """List graph entries."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        graph = BuildOrchestrator(settings=load_build_config(repo_root)).load_graph(repo_root)
    except FiddlerError as e:
        formatter.error(e)
        return 1

    installed = graph.external_identifiers()
    identifiers = graph.local_identifiers() + installed
    if args.components_only:
        identifiers = [identifier for identifier in identifiers if graph.is_build_target(identifier)]
    entries = [
        {
            "identifier": identifier,
            "build_target": graph.is_build_target(identifier),
            "installed": identifier in installed,
            "deps": list(graph[identifier].deps),
        }
        for identifier in identifiers
    ]

    if formatter.json_mode:
        formatter.json_output({"root": str(repo_root), "packages": entries})
        return 0

    for entry in entries:
        marker = "*" if entry["build_target"] else " "
        formatter.text(f"{marker} {entry['identifier']}")
        for dep in entry["deps"]:
            formatter.text(f"      -> {dep}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
