"""JSON schema loading and validation."""
from __future__ import annotations

from .validation import (
    SchemaValidationError,
    load_schema,
    strict_validator,
    validate_payload,
    validate_payload_safe,
)

__all__ = [
    "SchemaValidationError",
    "load_schema",
    "strict_validator",
    "validate_payload",
    "validate_payload_safe",
]
