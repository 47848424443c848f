"""YAML helpers for configuration layers and schema files."""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Any, List

import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Load a YAML document, or ``default`` when it is missing or empty.

    With ``raise_on_error`` a missing file raises :class:`FileNotFoundError`
    and parse errors propagate as :class:`yaml.YAMLError`; otherwise both
    fall back to ``default``.
    """
    path = Path(path)
    if not path.is_file():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_SH)
            try:
                data = yaml.safe_load(handle)
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


def iter_yaml_files(directory: Path) -> List[Path]:
    """Config layer files in ``directory``, sorted by stem.

    ``name.yaml`` wins over ``name.yml`` when both exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    by_stem = {p.stem: p for p in directory.glob("*.yml")}
    by_stem.update({p.stem: p for p in directory.glob("*.yaml")})
    return [by_stem[stem] for stem in sorted(by_stem)]


__all__ = ["read_yaml", "iter_yaml_files"]
