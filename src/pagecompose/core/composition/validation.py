"""Page-level validation.

Unlike descriptor checks at composition time, these rules never raise: they
return ``ValidationIssue`` records that callers log or print.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pagecompose.core.exceptions import DescriptorValidationError

from .descriptors import content_key, normalize_descriptor
from .types import ContentDescriptor

logger = logging.getLogger(__name__)

WARN = "warn"
ERROR = "error"


@dataclass(frozen=True)
class ValidationIssue:
    level: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.level == ERROR


def _children(item: Any) -> Sequence[Any]:
    if isinstance(item, ContentDescriptor):
        children = item.get("items")
    elif isinstance(item, Mapping):
        children = item.get("items")
    else:
        return ()
    if isinstance(children, (list, tuple)):
        return children
    return ()


def _undeclared_references(
    contents: Sequence[Any], declared: frozenset, prefix: str = "content"
) -> List[Dict[str, str]]:
    invalid: List[Dict[str, str]] = []
    for position, item in enumerate(contents):
        try:
            descriptor = normalize_descriptor(item, position, validate_schema=False)
        except DescriptorValidationError:
            # Reported separately as a structural error.
            continue
        item_key = str(content_key(descriptor, position, prefix))
        for name in descriptor.used_queries:
            if name not in declared:
                invalid.append({"item_key": item_key, "query": name})
        if descriptor.type == "container":
            invalid.extend(_undeclared_references(_children(item), declared, prefix))
    return invalid


def _structural_errors(contents: Sequence[Any], *, validate_schema: bool) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for position, item in enumerate(contents):
        try:
            normalize_descriptor(item, position, validate_schema=validate_schema)
        except DescriptorValidationError as exc:
            issues.append(ValidationIssue(ERROR, str(exc), dict(exc.context)))
    return issues


def validate_page(
    page_id: Optional[str],
    contents: Any = None,
    form_items: Optional[Sequence[Any]] = None,
    declared_queries: Optional[Iterable[str]] = None,
    *,
    validate_schema: bool = True,
) -> List[ValidationIssue]:
    """Return every issue found in a page definition (empty when valid).

    ``contents`` may be a function of the page mappings; such sources are only
    checked for presence since their descriptors do not exist yet.
    """
    issues: List[ValidationIssue] = []
    declared = list(declared_queries or ())

    if not page_id or not str(page_id).strip():
        issues.append(
            ValidationIssue(
                WARN,
                "Page id is empty or missing; keys and log records cannot identify the page.",
                {"id": page_id},
            )
        )

    static_contents = contents if isinstance(contents, (list, tuple)) else None
    has_contents = bool(static_contents) if static_contents is not None else contents is not None
    if not has_contents and not form_items and not declared:
        issues.append(
            ValidationIssue(
                WARN,
                "Page has no contents, form or queries; it will render empty.",
                {
                    "contents": contents is not None,
                    "form": form_items is not None,
                    "queries": bool(declared),
                },
            )
        )

    if static_contents:
        issues.extend(_structural_errors(static_contents, validate_schema=validate_schema))
        if declared_queries is not None:
            invalid = _undeclared_references(static_contents, frozenset(declared))
            if invalid:
                issues.append(
                    ValidationIssue(
                        WARN,
                        "Content items reference undeclared query names.",
                        {"invalid_references": invalid},
                    )
                )
    return issues


def log_validation_issues(issues: Iterable[ValidationIssue], page_id: str = "") -> None:
    for issue in issues:
        level = logging.ERROR if issue.is_error else logging.WARNING
        logger.log(level, "[page %s] %s", page_id or "?", issue.message)
        if issue.context:
            logger.debug("[page %s] context: %s", page_id or "?", issue.context)


def validate_and_log_page(
    page_id: Optional[str],
    contents: Any = None,
    form_items: Optional[Sequence[Any]] = None,
    declared_queries: Optional[Iterable[str]] = None,
) -> List[ValidationIssue]:
    issues = validate_page(page_id, contents, form_items, declared_queries)
    if issues:
        log_validation_issues(issues, page_id or "")
    return issues


__all__ = [
    "ValidationIssue",
    "validate_page",
    "log_validation_issues",
    "validate_and_log_page",
    "WARN",
    "ERROR",
]
