"""Domain-specific configuration accessors."""
from __future__ import annotations

from .build import BuildConfig
from .logging import LoggingConfig

__all__ = ["BuildConfig", "LoggingConfig"]
