"""Autoload map generation for built components."""
from __future__ import annotations

from .classmap import find_classes, scan
from .generator import AUTOLOAD_FILENAME, AutoloadGenerator, AutoloadMapGenerator, BuildTarget

__all__ = [
    "AUTOLOAD_FILENAME",
    "AutoloadGenerator",
    "AutoloadMapGenerator",
    "BuildTarget",
    "find_classes",
    "scan",
]
