"""
Fiddler build command.

SUMMARY: Build every fiddler.json component under the project root

Scans the project for component manifests, resolves each component's
dependencies and writes its autoload map to ``<component>/vendor``.
"""

from __future__ import annotations

import argparse
import sys

from fiddler.cli import OutputFormatter, add_standard_flags, get_repo_root, load_build_config
from fiddler.core.build import BuildOrchestrator
from fiddler.core.exceptions import FiddlerError

SUMMARY = "Build every fiddler.json component under the project root"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--optimize",
        action="store_true",
        default=None,
        help="Scan psr-4/psr-0 directories into the classmap",
    )
    parser.add_argument(
        "--no-dev",
        dest="no_dev",
        action="store_true",
        default=None,
        help="Skip autoload-dev rules of the built components",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Build all components."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        settings = load_build_config(repo_root)
        optimize = settings.optimize if args.optimize is None else args.optimize
        no_dev_mode = (not settings.dev_mode) if args.no_dev is None else args.no_dev

        orchestrator = BuildOrchestrator(settings=settings, echo=formatter.text)
        report = orchestrator.build(repo_root, optimize=optimize, no_dev_mode=no_dev_mode)
    except FiddlerError as e:
        formatter.error(e)
        return 1

    formatter.success(
        report.to_dict(),
        f"Built {len(report.results)} component(s).",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
