"""Manifest loading for Fiddler.

- model: the normalized :class:`Manifest` value
- loader: ``fiddler.json`` discovery and validation
- external: Composer installed-package adapter
- graph: the merged :class:`PackageGraph`
"""
from __future__ import annotations

from .external import INSTALLED_INDEX, VENDOR_PREFIX, ExternalPackageAdapter, load_external
from .graph import PackageGraph
from .loader import MANIFEST_NAME, ManifestLoader, find_and_load
from .model import ROOT_IDENTIFIER, Manifest

__all__ = [
    "Manifest",
    "ROOT_IDENTIFIER",
    "MANIFEST_NAME",
    "ManifestLoader",
    "find_and_load",
    "INSTALLED_INDEX",
    "VENDOR_PREFIX",
    "ExternalPackageAdapter",
    "load_external",
    "PackageGraph",
]
