from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

# Identifier used for a manifest placed directly at the project root.
ROOT_IDENTIFIER = "."


@dataclass(frozen=True)
class Manifest:
    """Normalized description of one component.

    Local components are identified by their directory relative to the
    project root; installed packages by ``vendor/<name>``. ``autoload`` and
    ``autoload_dev`` are opaque rule mappings passed through to the autoload
    generator unchanged.
    """

    identifier: str
    path: str
    autoload: Dict[str, Any] = field(default_factory=dict)
    autoload_dev: Dict[str, Any] = field(default_factory=dict)
    deps: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "path": self.path,
            "autoload": self.autoload,
            "autoload-dev": self.autoload_dev,
            "deps": list(self.deps),
        }
