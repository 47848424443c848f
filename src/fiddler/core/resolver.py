"""Dependency closure resolution.

Given a :class:`PackageGraph` and a starting component, walk the ``deps``
edges depth-first in declaration order and collect every transitive
dependency exactly once:

- environment markers (``vendor/php``, ``vendor/ext-*``, ``vendor/lib-*``)
  denote platform capabilities and are skipped;
- a dependency missing from the graph aborts with :class:`ResolutionError`;
- a manifest already collected is neither re-added nor re-expanded, which
  collapses diamonds and terminates cycles.

The walk uses an explicit stack so graph depth is not bounded by the
interpreter's recursion limit. The result keeps discovery order; it is not
a topological order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from fiddler.core.exceptions import ResolutionError
from fiddler.core.manifest.model import Manifest

logger = logging.getLogger(__name__)

PLATFORM_MARKER = "vendor/php"
MARKER_PREFIXES = ("vendor/ext-", "vendor/lib-")


@dataclass(frozen=True)
class EnvironmentMarkers:
    """Dependency identifiers that name a runtime capability, not a component."""

    platform: str = PLATFORM_MARKER
    prefixes: Tuple[str, ...] = MARKER_PREFIXES

    def matches(self, identifier: str) -> bool:
        return identifier == self.platform or identifier.startswith(self.prefixes)


DEFAULT_MARKERS = EnvironmentMarkers()


def is_environment_marker(identifier: str, markers: EnvironmentMarkers = DEFAULT_MARKERS) -> bool:
    """Return True when ``identifier`` is a platform/extension/library marker."""
    return markers.matches(identifier)


class ResolvedDependencySet:
    """Insertion-ordered set of manifests, unique by identifier."""

    def __init__(self) -> None:
        self._items: Dict[str, Manifest] = {}

    def add(self, manifest: Manifest) -> bool:
        """Add ``manifest``; return False when it was already present."""
        if manifest.identifier in self._items:
            return False
        self._items[manifest.identifier] = manifest
        return True

    def identifiers(self) -> List[str]:
        return list(self._items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Manifest):
            return item.identifier in self._items
        return item in self._items

    def __iter__(self) -> Iterator[Manifest]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ResolvedDependencySet({self.identifiers()!r})"


class DependencyResolver:
    """Compute the transitive dependency closure of one component."""

    def __init__(self, markers: Optional[EnvironmentMarkers] = None) -> None:
        self.markers = markers or DEFAULT_MARKERS

    def resolve(self, graph: Mapping[str, Manifest], start: str) -> ResolvedDependencySet:
        """Return every manifest reachable from ``start``, excluding ``start``.

        Raises:
            ResolutionError: If ``start`` or any reachable dependency is missing
                from ``graph``. No partial result is returned.
        """
        if start not in graph:
            raise ResolutionError(start)

        resolved = ResolvedDependencySet()
        root = graph[start]
        visited = {root.identifier}
        stack: List[Tuple[str, Iterator[str]]] = [(start, iter(root.deps))]

        while stack:
            current, pending = stack[-1]
            dependency = next(pending, None)
            if dependency is None:
                stack.pop()
                continue
            if self.markers.matches(dependency):
                continue

            manifest = graph.get(dependency)
            if manifest is None:
                raise ResolutionError(dependency, current)
            if manifest.identifier in visited:
                continue

            visited.add(manifest.identifier)
            resolved.add(manifest)
            stack.append((dependency, iter(manifest.deps)))

        logger.debug("Resolved %s -> %s", start, resolved.identifiers())
        return resolved


def resolve(graph: Mapping[str, Manifest], start: str) -> ResolvedDependencySet:
    """Resolve ``start`` with the default environment markers."""
    return DependencyResolver().resolve(graph, start)


__all__ = [
    "PLATFORM_MARKER",
    "MARKER_PREFIXES",
    "EnvironmentMarkers",
    "is_environment_marker",
    "ResolvedDependencySet",
    "DependencyResolver",
    "resolve",
]
