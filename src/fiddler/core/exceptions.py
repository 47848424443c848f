from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping


class FiddlerError(Exception):
    """Base exception for Fiddler."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return the JSON error payload the CLI prints in ``--json`` mode."""
        payload: Dict[str, Any] = {"error": self.__class__.__name__, "message": str(self)}
        if self.context:
            payload["context"] = self.context
        return payload


class ManifestError(FiddlerError, ValueError):
    """Raised when a component manifest or the package index is malformed.

    Every schema violation found in the offending file is aggregated into the
    message, one ``[property] message`` line each.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        violations: Iterable[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        self.path = path
        self.violations: List[str] = list(violations or [])
        if path:
            ctx["path"] = path
        if self.violations:
            ctx["violations"] = list(self.violations)
            message = message + "\n" + "\n".join(self.violations)
        FiddlerError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ResolutionError(FiddlerError, LookupError):
    """Raised when a declared dependency has no manifest in the graph."""

    def __init__(
        self,
        dependency: str,
        required_by: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["dependency"] = dependency
        self.dependency = dependency
        self.required_by = required_by
        if required_by is None:
            message = f"component '{dependency}' does not exist"
        else:
            ctx["required_by"] = required_by
            message = f"dependency '{dependency}' required by '{required_by}' does not exist"
        FiddlerError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class ConfigError(FiddlerError, ValueError):
    """Raised when configuration files or overrides cannot be loaded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FiddlerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "FiddlerError",
    "ManifestError",
    "ResolutionError",
    "ConfigError",
]
