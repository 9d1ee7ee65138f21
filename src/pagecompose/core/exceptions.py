from __future__ import annotations

from typing import Any, Dict, Mapping


class PageComposeError(Exception):
    """Base exception for pagecompose."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class DescriptorValidationError(PageComposeError, ValueError):
    """Raised when a content or auxiliary descriptor is structurally malformed."""

    def __init__(
        self,
        message: str = "",
        *,
        position: int | None = None,
        field: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if position is not None:
            ctx["position"] = position
        if field:
            ctx["field"] = field
        PageComposeError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ConfigurationError(PageComposeError):
    """Raised when the merged configuration is invalid."""


class ScopeClosedError(PageComposeError, RuntimeError):
    """Raised when a page scope is used after teardown."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PageComposeError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class PageFileError(PageComposeError):
    """Raised when a page definition file cannot be read or is invalid."""


__all__ = [
    "PageComposeError",
    "DescriptorValidationError",
    "ConfigurationError",
    "ScopeClosedError",
    "PageFileError",
]
