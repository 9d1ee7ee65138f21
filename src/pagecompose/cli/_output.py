"""Unified CLI output formatting utilities.

Commands print results to stdout and errors to stderr, either as text or as
JSON when ``--json`` is given.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Optional

from pagecompose.core.exceptions import PageComposeError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(self, error: Exception, message: Optional[str] = None) -> None:
        """Output an error result to stderr.

        ``PageComposeError`` instances carry their context into the JSON payload.
        """
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, PageComposeError):
                payload = error.to_json_error()
                payload["message"] = msg
            else:
                payload = {"message": msg, "code": error.__class__.__name__, "context": {}}
            print(json.dumps({"error": payload}, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")
