"""Autoload generation: the collaborator contract and the bundled generator.

The build orchestrator only relies on :class:`AutoloadGenerator`. The bundled
:class:`AutoloadMapGenerator` writes one JSON autoload map per component to
``<component>/vendor/autoload.json``:

    {
      "target": "<identifier>",
      "dev_mode": true,
      "optimized": false,
      "packages": ["<dependency identifiers in resolved order>"],
      "psr-4": {"Prefix\\\\": ["../src/"]},
      "psr-0": {},
      "classmap": {"Fully\\\\Qualified": "../lib/File.php"},
      "files": ["../bootstrap.php"]
    }

All paths are relative to the vendor directory holding the map.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Protocol, Tuple

from fiddler.core.manifest.model import Manifest
from fiddler.core.utils.io import write_json_atomic

from . import classmap

logger = logging.getLogger(__name__)

AUTOLOAD_FILENAME = "autoload.json"


@dataclass(frozen=True)
class BuildTarget:
    """A local component about to receive its autoload map."""

    identifier: str
    root: Path
    package_dir: Path
    vendor_dir: Path
    autoload: Dict[str, Any] = field(default_factory=dict)
    autoload_dev: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_manifest(cls, manifest: Manifest, root: Path) -> "BuildTarget":
        package_dir = Path(root) / manifest.path
        return cls(
            identifier=manifest.identifier,
            root=Path(root),
            package_dir=package_dir,
            vendor_dir=package_dir / "vendor",
            autoload=manifest.autoload,
            autoload_dev=manifest.autoload_dev,
        )


class AutoloadGenerator(Protocol):
    def dump(
        self,
        target: BuildTarget,
        dependencies: Iterable[Manifest],
        *,
        dev_mode: bool,
        optimize: bool,
    ) -> Path:
        """Write the autoload artifact for ``target`` and return its path."""
        ...


def _as_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


@dataclass
class _Rules:
    psr4: Dict[str, List[Path]] = field(default_factory=dict)
    psr0: Dict[str, List[Path]] = field(default_factory=dict)
    classmap: List[Path] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)

    def add(self, package_dir: Path, rules: Mapping[str, Any]) -> None:
        for key, bucket in (("psr-4", self.psr4), ("psr-0", self.psr0)):
            for prefix, paths in (rules.get(key) or {}).items():
                targets = bucket.setdefault(prefix, [])
                for rel in _as_list(paths):
                    path = package_dir / rel
                    if path not in targets:
                        targets.append(path)
        self.classmap.extend(package_dir / rel for rel in _as_list(rules.get("classmap") or []))
        self.files.extend(package_dir / rel for rel in _as_list(rules.get("files") or []))
        self.excludes.extend(
            (package_dir / rel).as_posix() for rel in _as_list(rules.get("exclude-from-classmap") or [])
        )


class AutoloadMapGenerator:
    """Write a JSON autoload map for each build target.

    ``classmap`` rules are always scanned for class declarations. With
    ``optimize`` the psr-4 and psr-0 directories are scanned as well, so every
    class resolves through the classmap without a filesystem lookup.
    """

    def __init__(self, output_filename: str = AUTOLOAD_FILENAME) -> None:
        self.output_filename = output_filename

    def collect(
        self,
        target: BuildTarget,
        dependencies: Iterable[Tuple[Path, Manifest]],
        *,
        dev_mode: bool,
    ) -> _Rules:
        rules = _Rules()
        rules.add(target.package_dir, target.autoload)
        if dev_mode:
            rules.add(target.package_dir, target.autoload_dev)
        for package_dir, manifest in dependencies:
            rules.add(package_dir, manifest.autoload)
        return rules

    def build_classmap(self, rules: _Rules, *, optimize: bool) -> Dict[str, Path]:
        found: Dict[str, Path] = {}

        def _merge(scanned: Mapping[str, Path], prefix: str = "") -> None:
            for class_name, path in scanned.items():
                if prefix and not class_name.startswith(prefix):
                    continue
                if class_name in found and found[class_name] != path:
                    logger.warning(
                        "Ambiguous class resolution: %s found in %s and %s; using the first",
                        class_name,
                        found[class_name],
                        path,
                    )
                    continue
                found[class_name] = path

        for path in rules.classmap:
            _merge(classmap.scan(path, rules.excludes))
        if optimize:
            for bucket in (rules.psr4, rules.psr0):
                for prefix, paths in bucket.items():
                    for path in paths:
                        _merge(classmap.scan(path, rules.excludes), prefix)
        return found

    def render(
        self,
        target: BuildTarget,
        packages: List[str],
        rules: _Rules,
        found: Mapping[str, Path],
        *,
        dev_mode: bool,
        optimize: bool,
    ) -> Dict[str, Any]:
        base = target.vendor_dir

        def rel(path: Path) -> str:
            relative = Path(os.path.relpath(path, base)).as_posix()
            if path.is_dir() and not relative.endswith("/"):
                relative += "/"
            return relative

        def prefixes(bucket: Dict[str, List[Path]]) -> Dict[str, List[str]]:
            # Longest-match-first lookups rely on reverse key order.
            return {prefix: [rel(p) for p in bucket[prefix]] for prefix in sorted(bucket, reverse=True)}

        return {
            "target": target.identifier,
            "dev_mode": dev_mode,
            "optimized": optimize,
            "packages": packages,
            "psr-4": prefixes(rules.psr4),
            "psr-0": prefixes(rules.psr0),
            "classmap": {name: rel(found[name]) for name in sorted(found)},
            "files": [rel(p) for p in rules.files],
        }

    def dump(
        self,
        target: BuildTarget,
        dependencies: Iterable[Manifest],
        *,
        dev_mode: bool,
        optimize: bool,
    ) -> Path:
        resolved = [(target.root / manifest.path, manifest) for manifest in dependencies]
        rules = self.collect(target, resolved, dev_mode=dev_mode)
        found = self.build_classmap(rules, optimize=optimize)
        data = self.render(
            target,
            [manifest.identifier for _, manifest in resolved],
            rules,
            found,
            dev_mode=dev_mode,
            optimize=optimize,
        )
        output = target.vendor_dir / self.output_filename
        write_json_atomic(output, data, sort_keys=False)
        logger.info("Wrote autoload map for %s to %s", target.identifier, output)
        return output


__all__ = [
    "AUTOLOAD_FILENAME",
    "BuildTarget",
    "AutoloadGenerator",
    "AutoloadMapGenerator",
]
