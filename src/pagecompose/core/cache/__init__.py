"""Identity-preserving caches."""
from __future__ import annotations

from .stable import StableCache, canonical_key

__all__ = ["StableCache", "canonical_key"]
