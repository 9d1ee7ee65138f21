"""Bundled configuration defaults and JSON schemas (YAML files)."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Return the path of a bundled data directory (``config``, ``schemas``) or file in it.

    Example:
        >>> get_data_path("schemas", "page.schema.yaml").name
        'page.schema.yaml'
    """
    base = Path(str(resources.files("pagecompose.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=64)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """Parse a bundled YAML file once; callers must not mutate the result."""
    text = get_data_path(subpackage, filename).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


__all__ = ["get_data_path", "read_yaml"]
