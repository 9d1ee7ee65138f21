"""Content composition: descriptors, rendering, ordering and reconciliation."""
from __future__ import annotations

from .completeness import Completeness, CompletenessTracker, is_mapping_complete
from .dependency_graph import DependencyGraph, DependencyNode, changed_keys
from .descriptors import auxiliary_key, check_descriptor, content_key, normalize_descriptor
from .engine import ContentComposer
from .form_data import FormDataResolver
from .memo import MemoizedRender
from .types import (
    CompositionResult,
    ContentDescriptor,
    PageMappings,
    RenderedElement,
    RenderRequest,
)
from .validation import (
    ValidationIssue,
    log_validation_issues,
    validate_and_log_page,
    validate_page,
)

__all__ = [
    "Completeness",
    "CompletenessTracker",
    "is_mapping_complete",
    "DependencyGraph",
    "DependencyNode",
    "changed_keys",
    "auxiliary_key",
    "check_descriptor",
    "content_key",
    "normalize_descriptor",
    "ContentComposer",
    "FormDataResolver",
    "MemoizedRender",
    "CompositionResult",
    "ContentDescriptor",
    "PageMappings",
    "RenderedElement",
    "RenderRequest",
    "ValidationIssue",
    "log_validation_issues",
    "validate_and_log_page",
    "validate_page",
]
