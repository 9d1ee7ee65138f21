"""Shared schema validation utilities.

pagecompose validates structured payloads (configuration, page files and
mapping descriptors) using JSON Schema. Schemas are stored as YAML files under
``pagecompose.data/schemas`` and loaded in a single, consistent way.

Validation uses a strict type checker: ``integer`` rejects ``bool`` and
integral floats, so a descriptor index of ``True`` or ``1.0`` fails instead of
being coerced.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator, validators

from pagecompose.data import get_data_path, read_yaml


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    def __init__(self, message: str, *, errors: List[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


def _is_strict_integer(checker: Any, instance: Any) -> bool:
    return isinstance(instance, int) and not isinstance(instance, bool)


_STRICT_TYPE_CHECKER = Draft202012Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer)

StrictValidator = validators.extend(Draft202012Validator, type_checker=_STRICT_TYPE_CHECKER)


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.schema.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.schema.yaml"

    path = get_data_path("schemas", schema_name)
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


@lru_cache(maxsize=16)
def strict_validator(schema_name: str) -> Any:
    """Return a cached strict validator for a bundled schema."""
    schema = load_schema(schema_name)
    StrictValidator.check_schema(schema)
    return StrictValidator(schema)


def _format_error(error: jsonschema.ValidationError) -> str:
    if error.path:
        path_str = ".".join(str(p) for p in error.path)
        return f"{path_str}: {error.message}"
    return error.message


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid)."""
    validator = strict_validator(schema_name)
    errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    return [_format_error(e) for e in errors]


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
        FileNotFoundError: If schema doesn't exist.
    """
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': {errors[0]}",
            errors=errors,
        )


__all__ = [
    "SchemaValidationError",
    "StrictValidator",
    "load_schema",
    "strict_validator",
    "validate_payload",
    "validate_payload_safe",
]
