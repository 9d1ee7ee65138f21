"""Dependency extraction: narrow full mappings to declared names."""
from __future__ import annotations

from .extractor import DataExtractor, Extractor

__all__ = ["DataExtractor", "Extractor"]
