"""Fiddler configuration: layered YAML loading and domain accessors."""
from __future__ import annotations

from .base import BaseDomainConfig
from .domains import BuildConfig, LoggingConfig
from .manager import ConfigManager

__all__ = ["ConfigManager", "BaseDomainConfig", "BuildConfig", "LoggingConfig"]
