"""Typed accessors over one top-level section of the merged configuration."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .manager import ConfigManager


class BaseDomainConfig(ABC):
    """Expose one config section (``build``, ``logging``) as properties.

    Subclasses name their section and read keys from :attr:`section`,
    falling back to module-level defaults when a key is absent::

        class BuildConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "build"

    Pass ``config`` to reuse an already merged dict instead of loading the
    layers again for ``repo_root``.
    """

    def __init__(self, repo_root: Optional[Path] = None, *, config: Optional[Dict[str, Any]] = None) -> None:
        self._repo_root = repo_root
        if config is None:
            config = ConfigManager(repo_root).load_config()
        self._config = config

    @abstractmethod
    def _config_section(self) -> str:
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        value = self._config.get(self._config_section())
        return value if isinstance(value, dict) else {}


__all__ = ["BaseDomainConfig"]
