"""Domain-specific configuration for content composition."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class CompositionConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "composition"

    @cached_property
    def content_key_prefix(self) -> str:
        return str(self.section.get("content_key_prefix") or "content")

    @cached_property
    def auxiliary_key_prefix(self) -> str:
        return str(self.section.get("auxiliary_key_prefix") or "form-element")

    @cached_property
    def validate_descriptors(self) -> bool:
        return bool(self.section.get("validate_descriptors", True))

    @cached_property
    def memoize_render(self) -> bool:
        return bool(self.section.get("memoize_render", False))

    @cached_property
    def warn_duplicate_keys(self) -> bool:
        return bool(self.section.get("warn_duplicate_keys", True))


__all__ = ["CompositionConfig"]
