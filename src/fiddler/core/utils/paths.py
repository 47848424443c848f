"""Project root resolution."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from fiddler.core.exceptions import FiddlerError

PROJECT_ROOT_ENV = "FIDDLER_PROJECT_ROOT"
PROJECT_CONFIG_DIR = ".fiddler"
_ROOT_MARKERS = (PROJECT_CONFIG_DIR, ".git")


class FiddlerPathError(FiddlerError, RuntimeError):
    """Raised when the project root cannot be determined."""


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Resolution priority:
    1. ``FIDDLER_PROJECT_ROOT`` environment variable
    2. Nearest ancestor of ``start`` (default: CWD) holding ``.fiddler/`` or ``.git``
    3. ``start`` itself

    Raises:
        FiddlerPathError: If the environment override points at a missing path.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.is_dir():
            raise FiddlerPathError(f"{PROJECT_ROOT_ENV} points at missing directory: {env_path}")
        return env_path

    origin = Path(start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return origin


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / PROJECT_CONFIG_DIR


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIR",
    "FiddlerPathError",
    "resolve_project_root",
    "get_project_config_dir",
]
