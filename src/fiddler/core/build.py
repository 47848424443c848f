"""Scan a project for ``fiddler.json`` components and build each of them.

Building a component means resolving its transitive dependencies and handing
them, with the component's own autoload rules, to an autoload generator. The
whole graph is recomputed on every run; there is no change detection.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from fiddler.core.autoload import AutoloadGenerator, AutoloadMapGenerator, BuildTarget
from fiddler.core.manifest import ExternalPackageAdapter, ManifestLoader, PackageGraph
from fiddler.core.resolver import DependencyResolver, ResolvedDependencySet
from fiddler.core.schemas import load_schema

if TYPE_CHECKING:
    from fiddler.core.config import BuildConfig

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


def _silent(_message: str) -> None:
    return None


@dataclass
class BuildResult:
    target: BuildTarget
    dependencies: ResolvedDependencySet
    output: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.target.identifier,
            "dependencies": self.dependencies.identifiers(),
            "output": str(self.output) if self.output is not None else None,
        }


@dataclass
class BuildReport:
    root: Path
    dev_mode: bool
    optimize: bool
    results: List[BuildResult] = field(default_factory=list)

    @property
    def components(self) -> List[str]:
        return [result.target.identifier for result in self.results]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "dev_mode": self.dev_mode,
            "optimize": self.optimize,
            "components": [result.to_dict() for result in self.results],
        }


class BuildOrchestrator:
    """Load the package graph and generate autoload maps for local components.

    Args:
        generator: Autoload generator collaborator (default: JSON autoload maps).
        resolver: Dependency resolver (default: built from ``settings`` markers).
        settings: Build configuration; module defaults apply when omitted.
        schema: Manifest schema; loaded from the project or bundled data when omitted.
        echo: Receives one progress line per step (default: silent).
    """

    def __init__(
        self,
        generator: Optional[AutoloadGenerator] = None,
        *,
        resolver: Optional[DependencyResolver] = None,
        settings: Optional["BuildConfig"] = None,
        schema: Optional[Dict[str, Any]] = None,
        echo: Optional[Echo] = None,
    ) -> None:
        self.settings = settings
        if generator is None:
            generator = (
                AutoloadMapGenerator(settings.output_filename) if settings is not None else AutoloadMapGenerator()
            )
        self.generator = generator
        if resolver is None:
            resolver = DependencyResolver(settings.markers if settings is not None else None)
        self.resolver = resolver
        self.schema = schema
        self.echo = echo or _silent

    def _manifest_loader(self, root: Path) -> ManifestLoader:
        schema = self.schema if self.schema is not None else load_schema(repo_root=root)
        if self.settings is None:
            return ManifestLoader(schema)
        return ManifestLoader(
            schema,
            manifest_name=self.settings.manifest_name,
            excluded_dirs=self.settings.excluded_dirs,
        )

    def _external_adapter(self) -> ExternalPackageAdapter:
        if self.settings is None:
            return ExternalPackageAdapter()
        return ExternalPackageAdapter(self.settings.installed_index, vendor_prefix=self.settings.vendor_prefix)

    def load_graph(self, root: Path) -> PackageGraph:
        """Load local manifests and installed packages into one graph.

        Raises:
            ManifestError: If any manifest or the package index is invalid.
        """
        root = Path(root).resolve()
        local = self._manifest_loader(root).find_and_load(root)
        external = self._external_adapter().load_external(root)
        if self.settings is None:
            return PackageGraph.from_sources(local, external)
        return PackageGraph.from_sources(local, external, vendor_prefix=self.settings.vendor_prefix)

    def build(self, root: Path, *, optimize: bool = False, no_dev_mode: bool = False) -> BuildReport:
        """Build every local component under ``root``.

        The first manifest or resolution error aborts the whole run.
        """
        root = Path(root).resolve()
        dev_mode = not no_dev_mode
        graph = self.load_graph(root)
        report = BuildReport(root=root, dev_mode=dev_mode, optimize=optimize)

        self.echo("Building fiddler.json projects.")
        for identifier in graph.build_targets():
            self.echo(f" [Build] {identifier}")
            manifest = graph[identifier]
            target = BuildTarget.for_manifest(manifest, root)
            dependencies = self.resolver.resolve(graph, identifier)
            logger.info("Building %s with %d dependencies", identifier, len(dependencies))
            output = self.generator.dump(target, dependencies, dev_mode=dev_mode, optimize=optimize)
            report.results.append(BuildResult(target=target, dependencies=dependencies, output=output))
        return report


def build(
    root: Path,
    optimize: bool = False,
    no_dev_mode: bool = False,
    *,
    echo: Optional[Echo] = None,
) -> BuildReport:
    """Run a full scan-resolve-generate cycle with default settings."""
    return BuildOrchestrator(echo=echo).build(root, optimize=optimize, no_dev_mode=no_dev_mode)


__all__ = ["BuildOrchestrator", "BuildReport", "BuildResult", "build"]
