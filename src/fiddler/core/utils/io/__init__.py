"""File I/O helpers: atomic writes plus locked JSON and YAML reads."""
from __future__ import annotations

from .core import atomic_write, ensure_directory
from .json import read_json, write_json_atomic
from .yaml import iter_yaml_files, read_yaml

__all__ = [
    "atomic_write",
    "ensure_directory",
    "read_json",
    "write_json_atomic",
    "read_yaml",
    "iter_yaml_files",
]
