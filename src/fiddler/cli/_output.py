"""Text and JSON rendering shared by every Fiddler command.

In JSON mode stdout carries exactly one JSON document and errors go to
stderr as a JSON object; progress lines are dropped.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from fiddler.core.exceptions import FiddlerError


class OutputFormatter:
    """Route command results to stdout/stderr in text or JSON form."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, default=str)

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Print ``message`` in text mode, ``{"status": ..., **data}`` in JSON mode."""
        if self.json_mode:
            print(self._dump({"status": status, **data}))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Report ``error`` on stderr.

        Fiddler errors render their own JSON payload
        (:meth:`FiddlerError.to_json_error`); other exceptions report
        ``error_code`` and their message.
        """
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return
        payload: Dict[str, Any]
        if isinstance(error, FiddlerError):
            payload = error.to_json_error()
        else:
            payload = {"error": error_code}
        payload["message"] = msg
        print(self._dump(payload), file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(self._dump(data))

    def text(self, message: str) -> None:
        """Print a progress or listing line; silent in JSON mode."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
