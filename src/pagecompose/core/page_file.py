"""YAML page definition files.

A page file describes one page instance: its content descriptors, the
current query, mutation and form-value mappings, optional form items and
submit entries, the data sources it declares, and its view settings.

Example:

    id: home
    declared: [user]
    queries:
      user: {name: Ada}
    contents:
      - key: greeting
        used_queries: [user]
      - key: banner
        index: -1
        render_in_header: true
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from pagecompose.core.exceptions import PageFileError
from pagecompose.core.schemas.validation import validate_payload_safe
from pagecompose.core.utils.io import read_yaml


@dataclass
class PageDefinition:
    id: str
    namespace: str = ""
    contents: List[Dict[str, Any]] = field(default_factory=list)
    queries: Dict[str, Any] = field(default_factory=dict)
    mutations: Dict[str, Any] = field(default_factory=dict)
    form_values: Dict[str, Any] = field(default_factory=dict)
    form_items: List[Dict[str, Any]] = field(default_factory=list)
    form_submit: List[Dict[str, Any]] = field(default_factory=list)
    declared: List[str] = field(default_factory=list)
    view_settings: Dict[str, Any] = field(default_factory=dict)
    path: Path | None = None

    @property
    def known_query_names(self) -> List[str]:
        """Names a descriptor may reference: declared sources plus present queries and mutations."""
        names = list(self.declared)
        for name in (*self.queries, *self.mutations):
            if name not in names:
                names.append(name)
        return names

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Path | None = None) -> "PageDefinition":
        form = data.get("form") or {}
        return cls(
            id=data["id"],
            namespace=data.get("namespace", ""),
            contents=list(data.get("contents") or []),
            queries=dict(data.get("queries") or {}),
            mutations=dict(data.get("mutations") or {}),
            form_values=dict(data.get("form_values") or {}),
            form_items=list(form.get("items") or []),
            form_submit=list(form.get("submit") or []),
            declared=list(data.get("declared") or []),
            view_settings=dict(data.get("view_settings") or {}),
            path=path,
        )


def load_page_file(path: Union[str, Path]) -> PageDefinition:
    """Read and validate a page definition file.

    Raises:
        PageFileError: If the file is missing, is not valid YAML or does not
            match the page schema.
    """
    path = Path(path)
    try:
        data = read_yaml(path, raise_on_error=True)
    except (OSError, yaml.YAMLError) as exc:
        raise PageFileError(
            f"Cannot read page file {path}: {exc}", context={"path": str(path)}
        ) from exc

    if not isinstance(data, dict):
        raise PageFileError(
            f"Page file {path} must contain a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )
    errors = validate_payload_safe(data, "page")
    if errors:
        raise PageFileError(
            f"Invalid page file {path}: {errors[0]}",
            context={"path": str(path), "errors": errors},
        )
    return PageDefinition.from_dict(data, path=path)


__all__ = ["PageDefinition", "load_page_file"]
