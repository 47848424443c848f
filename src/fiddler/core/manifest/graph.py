"""The merged, read-only universe of manifests for one build run."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional

from .external import VENDOR_PREFIX
from .model import Manifest

logger = logging.getLogger(__name__)


class PackageGraph(Mapping):
    """Immutable mapping of identifier → :class:`Manifest`.

    Local component manifests come first, installed packages after; the
    order only matters for reporting. Any identifier starting with the
    ``vendor/`` prefix is treated as an installed package and never built,
    whichever loader produced it.
    """

    def __init__(
        self,
        manifests: Mapping[str, Manifest],
        *,
        external: Optional[Mapping[str, Manifest]] = None,
        vendor_prefix: str = VENDOR_PREFIX,
    ) -> None:
        merged: Dict[str, Manifest] = dict(manifests)
        for identifier, manifest in (external or {}).items():
            if identifier in manifests:
                logger.warning("Installed package %s shadows the local component of the same name", identifier)
            merged[identifier] = manifest
        self._manifests = MappingProxyType(merged)
        self._external = frozenset(external or ())
        self.vendor_prefix = vendor_prefix

    @classmethod
    def from_sources(
        cls,
        local: Mapping[str, Manifest],
        external: Mapping[str, Manifest],
        *,
        vendor_prefix: str = VENDOR_PREFIX,
    ) -> "PackageGraph":
        return cls(local, external=external, vendor_prefix=vendor_prefix)

    def __getitem__(self, identifier: str) -> Manifest:
        return self._manifests[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._manifests)

    def __len__(self) -> int:
        return len(self._manifests)

    def __repr__(self) -> str:
        return f"PackageGraph({len(self)} manifests)"

    def is_build_target(self, identifier: str) -> bool:
        return not identifier.startswith(self.vendor_prefix)

    def build_targets(self) -> List[str]:
        """Identifiers that get an autoload map, in graph order."""
        return [identifier for identifier in self._manifests if self.is_build_target(identifier)]

    def local_identifiers(self) -> List[str]:
        return [identifier for identifier in self._manifests if identifier not in self._external]

    def external_identifiers(self) -> List[str]:
        return [identifier for identifier in self._manifests if identifier in self._external]


__all__ = ["PackageGraph"]
