from __future__ import annotations

import pytest

from pagecompose.core.schemas import SchemaValidationError, validate_payload, validate_payload_safe


def test_integer_rejects_bool_and_float() -> None:
    assert validate_payload_safe({"index": 3}, "descriptor") == []
    assert validate_payload_safe({"index": True}, "descriptor")
    assert validate_payload_safe({"index": 3.0}, "descriptor")


def test_errors_carry_their_path() -> None:
    errors = validate_payload_safe({"used_queries": ["ok", 2]}, "descriptor")
    assert errors and errors[0].startswith("used_queries.1:")


def test_validate_payload_raises_with_all_errors() -> None:
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_payload({"id": 1, "extra": True}, "page")
    assert len(excinfo.value.errors) == 2


def test_unknown_schema() -> None:
    with pytest.raises(FileNotFoundError):
        validate_payload_safe({}, "nonexistent")
