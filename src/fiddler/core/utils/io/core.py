"""Filesystem primitives shared by the JSON and YAML helpers.

Writes land in a sibling temp file first and replace the target with a
single ``os.replace``.
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) unless it already is a directory.

    Raises:
        NotADirectoryError: If ``path`` exists as a file.
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Write ``path`` through a temp file in the same directory.

    ``write_fn`` receives the open temp file. The parent directory is created
    on demand and the temp file never outlives a failed write.
    """
    path = Path(path)
    ensure_directory(path.parent)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as handle:
            tmp_path = Path(handle.name)
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            write_fn(handle)
            handle.flush()
            os.fsync(handle.fileno())
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)


__all__ = ["ensure_directory", "atomic_write"]
