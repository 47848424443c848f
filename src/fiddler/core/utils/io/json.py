"""JSON reads and writes for manifests, package indexes and autoload maps."""
from __future__ import annotations

import fcntl
import json
from pathlib import Path
from typing import Any

from .core import atomic_write

_MISSING = object()


def read_json(path: Path, *, default: Any = _MISSING) -> Any:
    """Parse the JSON document at ``path`` under a shared lock.

    ``default`` is returned when the file does not exist; without it a
    missing file raises :class:`FileNotFoundError`. Decoding errors always
    propagate so callers can attach their own context.
    """
    path = Path(path)
    if not path.is_file():
        if default is not _MISSING:
            return default
        raise FileNotFoundError(f"JSON file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        fcntl.flock(handle.fileno(), fcntl.LOCK_SH)
        try:
            return json.load(handle)
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def write_json_atomic(path: Path, data: Any, *, indent: int = 2, sort_keys: bool = True) -> None:
    """Serialize ``data`` to ``path`` atomically, newline-terminated.

    Key order matters for autoload maps (longest prefix first), so callers
    writing them pass ``sort_keys=False``.
    """

    def _dump(handle) -> None:
        json.dump(data, handle, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
        handle.write("\n")

    atomic_write(Path(path), _dump)


__all__ = ["read_json", "write_json_atomic"]
