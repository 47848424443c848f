"""Canonical merge utilities.

Two merge flavours are used across Fiddler:

- ``deep_merge``: layered configuration merging. Later layers win for scalars;
  arrays follow override semantics (prefix ``+`` appends, ``=`` or no prefix
  replaces).
- ``merge_recursive``: autoload rule merging for installed packages. Nothing
  is overwritten: mappings merge key by key, arrays concatenate, and colliding
  scalar values are collected into a list.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Supports special prefixes in the first element:
    - "+" : Append override items (excluding prefix) to base
    - "=" : Replace base with override items (excluding prefix)
    - No prefix: Replace base entirely with override

    Example:
        >>> merge_arrays([1, 2], [3, 4])
        [3, 4]
        >>> merge_arrays([1, 2], ["+", 3, 4])
        [1, 2, 3, 4]
    """
    if not override:
        return list(override)
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return list(value)
    return [value]


def merge_recursive(base: Mapping[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``extra`` into ``base`` without losing any value.

    Matches Composer's treatment of ``autoload`` + ``autoload-dev``:

    Example:
        >>> merge_recursive({"psr-4": {"A\\\\": "src/"}}, {"psr-4": {"A\\\\": "tests/"}})
        {'psr-4': {'A\\\\': ['src/', 'tests/']}}
        >>> merge_recursive({"classmap": ["lib/"]}, {"classmap": ["fixtures/"]})
        {'classmap': ['lib/', 'fixtures/']}
    """
    result: Dict[str, Any] = {key: _copy(value) for key, value in (base or {}).items()}
    for key, value in (extra or {}).items():
        if key not in result:
            result[key] = _copy(value)
            continue
        current = result[key]
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = merge_recursive(current, value)
        else:
            result[key] = _as_list(current) + _as_list(_copy(value))
    return result


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy(v) for v in value]
    return value


__all__ = ["deep_merge", "merge_arrays", "merge_recursive"]
