"""PHP class discovery for classmap generation.

A light-weight scanner: comments and string literals are blanked out, then
``namespace`` statements and class-like declarations (class, interface,
trait, enum) are matched with regular expressions.
"""
from __future__ import annotations

import fnmatch
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

logger = logging.getLogger(__name__)

PHP_SUFFIXES = frozenset({".php", ".inc", ".hh"})

_COMMENTS_AND_STRINGS = re.compile(
    r"""
      /\*.*?\*/                  # block comment
    | //[^\n]*                   # line comment
    | \#(?!\[)[^\n]*             # shell comment (not an attribute)
    | '(?:\\.|[^'\\])*'          # single-quoted string
    | "(?:\\.|[^"\\])*"          # double-quoted string
    """,
    re.DOTALL | re.VERBOSE,
)
_HEREDOC = re.compile(r"<<<\s*['\"]?(\w+)['\"]?\n.*?\n\s*\1\b", re.DOTALL)
_TOKENS = re.compile(
    r"""
      (?<![\w$\\])namespace\s+(?P<ns>[\w\\]+)?\s*[;{]
    | (?<![\w$:>-])(?P<kind>class|interface|trait|enum)\s+(?P<name>\w+)
    """,
    re.VERBOSE | re.IGNORECASE,
)
_NOT_A_NAME = frozenset({"extends", "implements"})


def _blank(match: re.Match) -> str:
    # comments vanish, strings keep an empty literal so statements stay intact
    return " " if match.group(0)[0] in "/#" else "''"


def _strip(source: str) -> str:
    source = _HEREDOC.sub("''", source)
    return _COMMENTS_AND_STRINGS.sub(_blank, source)


def find_classes(source: str) -> List[str]:
    """Return fully qualified class-like names declared in PHP ``source``."""
    classes: List[str] = []
    namespace = ""
    for match in _TOKENS.finditer(_strip(source)):
        if match.group("kind") is None:
            namespace = (match.group("ns") or "").strip("\\")
            continue
        name = match.group("name")
        if name.lower() in _NOT_A_NAME:
            continue
        classes.append(f"{namespace}\\{name}" if namespace else name)
    return classes


def is_excluded(path: Path, exclude_patterns: Iterable[str]) -> bool:
    """True when ``path`` falls under one of the absolute POSIX patterns."""
    candidate = Path(path).as_posix()
    for pattern in exclude_patterns:
        trimmed = pattern.rstrip("/")
        if candidate == trimmed or candidate.startswith(trimmed + "/"):
            return True
        if fnmatch.fnmatch(candidate, pattern.replace("**", "*")):
            return True
    return False


def iter_php_files(path: Path) -> Iterator[Path]:
    path = Path(path)
    if path.is_file():
        yield path
        return
    if not path.is_dir():
        logger.warning("Autoload path %s does not exist", path)
        return
    for candidate in sorted(path.rglob("*")):
        if candidate.is_file() and candidate.suffix in PHP_SUFFIXES:
            yield candidate


def scan(path: Path, exclude_patterns: Iterable[str] = ()) -> Dict[str, Path]:
    """Map every class declared under ``path`` (file or directory) to its file."""
    excludes = list(exclude_patterns)
    found: Dict[str, Path] = {}
    for php_file in iter_php_files(path):
        if is_excluded(php_file, excludes):
            continue
        source = php_file.read_text(encoding="utf-8", errors="replace")
        for class_name in find_classes(source):
            found.setdefault(class_name, php_file)
    return found


__all__ = ["PHP_SUFFIXES", "find_classes", "is_excluded", "iter_php_files", "scan"]
