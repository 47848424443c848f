"""Schema validation utilities for Fiddler.

This module provides centralized JSON schema loading and validation.
"""
from __future__ import annotations

from .validation import (
    MANIFEST_SCHEMA,
    build_validator,
    collect_violations,
    load_schema,
)

__all__ = [
    "MANIFEST_SCHEMA",
    "load_schema",
    "build_validator",
    "collect_violations",
]
