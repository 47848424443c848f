"""Shared schema validation utilities.

Fiddler validates JSON documents (component manifests) using JSON Schema.
Schemas are stored as YAML files and loaded in a single, consistent way.

Schema resolution order (highest priority → lowest):
1) Project schemas: ``<repo>/.fiddler/schemas/``
2) Bundled defaults: ``fiddler.data/schemas/``

Loaded schemas are plain values: callers load once and hand the schema (or a
validator built from it) to whatever needs it.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

from fiddler.core.utils.io import read_yaml
from fiddler.data import get_data_path

PROJECT_SCHEMAS_DIR = Path(".fiddler") / "schemas"
MANIFEST_SCHEMA = "manifest.schema.yaml"


def _iter_schema_dirs(repo_root: Optional[Path] = None) -> List[Path]:
    """Return schema search roots in priority order."""
    roots: List[Path] = []
    if repo_root is not None:
        roots.append(Path(repo_root) / PROJECT_SCHEMAS_DIR)
    roots.append(get_data_path("schemas"))
    return roots


def load_schema(schema_name: str = MANIFEST_SCHEMA, *, repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load a schema dict from project or bundled schema directories.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path: Optional[Path] = None
    for schemas_dir in _iter_schema_dirs(repo_root):
        candidate = schemas_dir / schema_name
        if candidate.exists():
            schema_path = candidate
            break

    if schema_path is None:
        searched = "\n".join(f"- {p}" for p in _iter_schema_dirs(repo_root))
        raise FileNotFoundError(f"Schema not found: {schema_name}\nSearched:\n{searched}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def build_validator(schema: Dict[str, Any]) -> Draft202012Validator:
    """Check ``schema`` itself and return a reusable validator for it."""
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def collect_violations(payload: Any, validator: Draft202012Validator) -> List[str]:
    """Validate ``payload`` and return every violation as ``[property] message``.

    The property is the dotted path of the offending value, or empty for the
    document root. Returns an empty list when the payload is valid.
    """
    violations: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        prop = ".".join(str(p) for p in error.absolute_path)
        violations.append(f"[{prop}] {error.message}")
    return violations


__all__ = [
    "MANIFEST_SCHEMA",
    "load_schema",
    "build_validator",
    "collect_violations",
]
