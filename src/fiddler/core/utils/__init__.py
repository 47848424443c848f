"""Shared utilities for Fiddler core modules."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays, merge_recursive

__all__ = ["deep_merge", "merge_arrays", "merge_recursive"]
