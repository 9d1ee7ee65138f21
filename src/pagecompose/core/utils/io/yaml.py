"""YAML file helpers shared by configuration and page-file loading."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List

import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse a YAML file with ``yaml.safe_load``.

    An empty document yields ``default``. A missing or unparsable file yields
    ``default`` too unless ``raise_on_error`` is set, in which case
    ``FileNotFoundError``, ``OSError`` or ``yaml.YAMLError`` propagate.
    """
    path = Path(path)
    if not path.is_file():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


def iter_yaml_files(directory: Path) -> List[Path]:
    """Return ``*.yaml`` and ``*.yml`` files in ``directory``, sorted by name."""
    d = Path(directory)
    if not d.is_dir():
        return []
    return sorted(
        (p for p in d.iterdir() if p.is_file() and p.suffix in (".yaml", ".yml")),
        key=lambda p: p.name,
    )


__all__ = ["read_yaml", "iter_yaml_files"]
