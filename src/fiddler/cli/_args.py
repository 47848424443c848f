"""Argument helpers shared by the command modules."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of text",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        metavar="DIR",
        help="Project root to scan for fiddler.json files (default: auto-detected)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Register --json and --repo-root, which every command accepts."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = ["add_json_flag", "add_repo_root_flag", "add_standard_flags"]
