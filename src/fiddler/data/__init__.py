"""Bundled data shipped with Fiddler: default config layers and JSON schemas."""
from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Filesystem path of a bundled data directory, or a file inside it.

    Example:
        >>> get_data_path("schemas", "manifest.schema.yaml").name
        'manifest.schema.yaml'
    """
    base = Path(str(resources.files(__name__) / subpackage))
    return base / filename if filename else base


__all__ = ["get_data_path"]
