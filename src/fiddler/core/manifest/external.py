"""Adapter for Composer's installed-package index.

Installed packages become manifests namespaced under ``vendor/`` so they can
be depended on like components but never collide with local identifiers.
Both index shapes are accepted: the Composer 1 top-level array and the
Composer 2 ``{"packages": [...]}`` object.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from fiddler.core.exceptions import ManifestError
from fiddler.core.utils.io import read_json
from fiddler.core.utils.merge import merge_recursive

from .model import Manifest

logger = logging.getLogger(__name__)

INSTALLED_INDEX = "vendor/composer/installed.json"
VENDOR_PREFIX = "vendor/"


def _package_entries(data: Any, display: str) -> List[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("packages"), list):
        return data["packages"]
    raise ManifestError(
        f"invalid installed-package index at {display}: expected a list of packages",
        path=display,
    )


def _invalid_field(field: str, package: str, display: str, expected: str) -> ManifestError:
    return ManifestError(
        f"invalid installed-package index at {display}",
        path=display,
        violations=[f"[{package}.{field}] must be {expected}"],
    )


def _names(mapping: Any, field: str, package: str, display: str) -> List[str]:
    # json_encode writes an empty PHP map as []
    if not mapping and isinstance(mapping, (list, type(None))):
        return []
    if not isinstance(mapping, Mapping):
        raise _invalid_field(field, package, display, "an object of name to version constraint")
    return [str(name) for name in mapping]


def _rules(rules: Any, field: str, package: str, display: str) -> Dict[str, Any]:
    if not rules and isinstance(rules, (list, type(None))):
        return {}
    if not isinstance(rules, Mapping):
        raise _invalid_field(field, package, display, "an object of autoload rules")
    return dict(rules)


class ExternalPackageAdapter:
    """Turn installed Composer packages into :class:`Manifest` values."""

    def __init__(self, index_path: str = INSTALLED_INDEX, *, vendor_prefix: str = VENDOR_PREFIX) -> None:
        self.index_path = index_path
        self.vendor_prefix = vendor_prefix

    def to_manifest(self, entry: Mapping[str, Any]) -> Manifest:
        """Synthesize the manifest for one package entry.

        ``autoload-dev`` is folded into ``autoload``; required package names
        become ``vendor/<name>`` dependencies with constraints discarded.
        """
        name = entry["name"]
        identifier = f"{self.vendor_prefix}{name}"
        display = self.index_path
        autoload = _rules(entry.get("autoload"), "autoload", name, display)
        autoload_dev = _rules(entry.get("autoload-dev"), "autoload-dev", name, display)
        if autoload_dev:
            autoload = merge_recursive(autoload, autoload_dev)
        deps = tuple(
            f"{self.vendor_prefix}{required}"
            for required in _names(entry.get("require"), "require", name, display)
        )
        return Manifest(identifier=identifier, path=identifier, autoload=autoload, deps=deps)

    def load_external(self, root: Path) -> Dict[str, Manifest]:
        """Load all installed packages under ``root``, keyed by identifier.

        Each ``replace`` name is registered as an alias pointing at the very
        same manifest object. A missing index contributes nothing.

        Raises:
            ManifestError: If the index is not JSON or not a package list.
        """
        index = Path(root) / self.index_path
        display = self.index_path
        try:
            data = read_json(index, default=None)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ManifestError(
                f"invalid installed-package index at {display}: {exc}",
                path=display,
            ) from exc
        if data is None:
            logger.debug("No installed-package index at %s", index)
            return {}

        packages: Dict[str, Manifest] = {}
        for position, entry in enumerate(_package_entries(data, display)):
            if not isinstance(entry, Mapping) or not isinstance(entry.get("name"), str) or not entry["name"]:
                raise ManifestError(
                    f"invalid installed-package index at {display}",
                    path=display,
                    violations=[f"[{position}] package entry must be an object with a string 'name'"],
                )
            manifest = self.to_manifest(entry)
            aliases = [
                f"{self.vendor_prefix}{replaced}"
                for replaced in _names(entry.get("replace"), "replace", entry["name"], display)
            ]
            for identifier in [manifest.identifier, *aliases]:
                if identifier in packages:
                    logger.warning("Installed package %s registered twice; keeping the later entry", identifier)
                packages[identifier] = manifest
        logger.info("Loaded %d installed package identifier(s) from %s", len(packages), display)
        return packages


def load_external(root: Path, index_path: str = INSTALLED_INDEX) -> Dict[str, Manifest]:
    """Convenience wrapper around :meth:`ExternalPackageAdapter.load_external`."""
    return ExternalPackageAdapter(index_path).load_external(root)


__all__ = ["INSTALLED_INDEX", "VENDOR_PREFIX", "ExternalPackageAdapter", "load_external"]
