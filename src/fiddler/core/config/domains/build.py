"""Domain-specific configuration for component builds."""
from __future__ import annotations

from functools import cached_property
from typing import List, Tuple

from fiddler.core.autoload.generator import AUTOLOAD_FILENAME
from fiddler.core.manifest.external import INSTALLED_INDEX, VENDOR_PREFIX
from fiddler.core.manifest.loader import DEFAULT_EXCLUDED_DIRS, MANIFEST_NAME
from fiddler.core.resolver import MARKER_PREFIXES, PLATFORM_MARKER, EnvironmentMarkers

from ..base import BaseDomainConfig


class BuildConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "build"

    @cached_property
    def manifest_name(self) -> str:
        return str(self.section.get("manifest_name") or MANIFEST_NAME)

    @cached_property
    def excluded_dirs(self) -> List[str]:
        dirs = self.section.get("excluded_dirs")
        if dirs is None:
            return list(DEFAULT_EXCLUDED_DIRS)
        return [str(d) for d in dirs]

    @cached_property
    def installed_index(self) -> str:
        return str(self.section.get("installed_index") or INSTALLED_INDEX)

    @cached_property
    def vendor_prefix(self) -> str:
        return str(self.section.get("vendor_prefix") or VENDOR_PREFIX)

    @cached_property
    def platform_marker(self) -> str:
        return str(self.section.get("platform_marker") or PLATFORM_MARKER)

    @cached_property
    def marker_prefixes(self) -> Tuple[str, ...]:
        prefixes = self.section.get("marker_prefixes")
        if prefixes is None:
            return MARKER_PREFIXES
        return tuple(str(p) for p in prefixes)

    @cached_property
    def markers(self) -> EnvironmentMarkers:
        return EnvironmentMarkers(platform=self.platform_marker, prefixes=self.marker_prefixes)

    @cached_property
    def optimize(self) -> bool:
        return bool(self.section.get("optimize", False))

    @cached_property
    def dev_mode(self) -> bool:
        return bool(self.section.get("dev_mode", True))

    @cached_property
    def output_filename(self) -> str:
        return str(self.section.get("output_filename") or AUTOLOAD_FILENAME)


__all__ = ["BuildConfig"]
