"""Component manifest discovery and loading.

Walks a project tree for ``fiddler.json`` files, validates each against the
manifest schema and normalizes it into a :class:`Manifest`. Directories named
``vendor`` (at any depth) and version-control metadata are never descended
into.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

from fiddler.core.exceptions import ManifestError
from fiddler.core.schemas import build_validator, collect_violations

from .model import ROOT_IDENTIFIER, Manifest

logger = logging.getLogger(__name__)

MANIFEST_NAME = "fiddler.json"
VCS_DIRS = (".git", ".svn", "_svn", ".hg", "CVS", "_darcs", ".arch-params", ".monotone", ".bzr")
DEFAULT_EXCLUDED_DIRS = ("vendor",) + VCS_DIRS


def relative_identifier(directory: Path, root: Path) -> str:
    """Return the POSIX identifier of ``directory`` relative to ``root``."""
    rel = Path(directory).relative_to(root).as_posix()
    return rel if rel not in ("", ".") else ROOT_IDENTIFIER


class ManifestLoader:
    """Find and load every component manifest under a root directory.

    The schema is a plain value supplied by the caller (see
    :func:`fiddler.core.schemas.load_schema`), so one loaded schema can serve
    any number of loaders and tests can hand in their own.
    """

    def __init__(
        self,
        schema: Dict[str, Any],
        *,
        manifest_name: str = MANIFEST_NAME,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    ) -> None:
        self.schema = schema
        self.manifest_name = manifest_name
        self.excluded_dirs = frozenset(excluded_dirs)
        self._validator = build_validator(schema)

    def iter_manifest_files(self, root: Path) -> Iterator[Path]:
        """Yield manifest paths under ``root`` in sorted, deterministic order."""
        root = Path(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)
            if self.manifest_name in filenames:
                yield Path(dirpath) / self.manifest_name

    def load_manifest_file(self, path: Path, root: Path) -> Manifest:
        """Parse, validate and normalize a single manifest file.

        Raises:
            ManifestError: If the file is not JSON or violates the schema.
        """
        path = Path(path)
        root = Path(root)
        identifier = relative_identifier(path.parent, root)
        display = path.relative_to(root).as_posix()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ManifestError(
                f"invalid manifest at {display}: {exc}",
                path=display,
            ) from exc

        violations = collect_violations(data, self._validator)
        if violations:
            raise ManifestError(f"invalid manifest at {display}", path=display, violations=violations)

        return Manifest(
            identifier=identifier,
            path=identifier,
            autoload=dict(data.get("autoload") or {}),
            autoload_dev=dict(data.get("autoload-dev") or {}),
            deps=tuple(data.get("deps") or ()),
        )

    def find_and_load(self, root: Path) -> Dict[str, Manifest]:
        """Load every manifest under ``root`` keyed by identifier."""
        root = Path(root).resolve()
        manifests: Dict[str, Manifest] = {}
        for manifest_path in self.iter_manifest_files(root):
            manifest = self.load_manifest_file(manifest_path, root)
            logger.debug("Loaded component manifest %s", manifest.identifier)
            manifests[manifest.identifier] = manifest
        logger.info("Found %d component manifest(s) under %s", len(manifests), root)
        return manifests


def find_and_load(root: Path, schema: Dict[str, Any], *, excluded_dirs: Optional[List[str]] = None) -> Dict[str, Manifest]:
    """Convenience wrapper around :meth:`ManifestLoader.find_and_load`."""
    if excluded_dirs is None:
        loader = ManifestLoader(schema)
    else:
        loader = ManifestLoader(schema, excluded_dirs=excluded_dirs)
    return loader.find_and_load(root)


__all__ = [
    "MANIFEST_NAME",
    "VCS_DIRS",
    "DEFAULT_EXCLUDED_DIRS",
    "ManifestLoader",
    "find_and_load",
    "relative_identifier",
]
