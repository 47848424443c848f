from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from fiddler.core.utils.io import ensure_directory

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_FIDDLER_HANDLERS: list[logging.Handler] = []


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    """Configure stdlib logging for a CLI invocation.

    - ``log_path``: install a file handler at ``level``.
    - ``verbose``: install a stderr handler at DEBUG.

    Handlers installed by a previous call are replaced, so repeated calls in
    one process (tests) never stack handlers.
    """
    root = logging.getLogger()
    _remove_fiddler_handlers(root)

    levels = [_level_from_name(level)]
    formatter = logging.Formatter(LOG_FORMAT)

    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setLevel(levels[0])
        fh.setFormatter(formatter)
        root.addHandler(fh)
        _FIDDLER_HANDLERS.append(fh)

    if verbose:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        sh.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(sh)
        _FIDDLER_HANDLERS.append(sh)
        levels.append(logging.DEBUG)

    root.setLevel(min(levels))


def _remove_fiddler_handlers(root: logging.Logger) -> None:
    while _FIDDLER_HANDLERS:
        handler = _FIDDLER_HANDLERS.pop()
        root.removeHandler(handler)
        handler.close()


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib logging's lastResort handler from polluting JSON output.

    Ensures the root logger has at least one handler (a NullHandler) when it
    otherwise has none.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    null = logging.NullHandler()
    root.addHandler(null)
    _FIDDLER_HANDLERS.append(null)


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove every handler this module installed."""
    _remove_fiddler_handlers(logging.getLogger())


__all__ = [
    "configure_stdlib_logging",
    "suppress_lastresort_in_json_mode",
    "reset_stdlib_logging_for_tests",
]
