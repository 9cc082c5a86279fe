from __future__ import annotations

from webselect.models.cache import CacheEntry, CacheKey
from webselect.models.extraction import ExtractionResult

__all__ = [
    # cache
    "CacheKey",
    "CacheEntry",
    # responses
    "ExtractionResult",
]
