"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from fiddler.core.config import BuildConfig, ConfigManager
from fiddler.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return resolve_project_root()


def load_config(repo_root: Path) -> Dict[str, Any]:
    return ConfigManager(repo_root).load_config()


def load_build_config(repo_root: Path, config: Optional[Dict[str, Any]] = None) -> BuildConfig:
    return BuildConfig(repo_root, config=config if config is not None else load_config(repo_root))


__all__ = ["get_repo_root", "load_config", "load_build_config"]
