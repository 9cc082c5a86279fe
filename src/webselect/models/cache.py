from __future__ import annotations

from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


class CacheKey(NamedTuple):
    """Identity of a scrape request: (normalized URL, raw selector, raw-mode flag).

    A tuple rather than a concatenated string, so ``("a", "x", True)`` and
    ``("ax", "", True)`` stay distinct.
    """

    url: str
    selector: str
    raw: bool


class CacheEntry(BaseModel):
    """A serialized response body and the instant it was stored."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime  # UTC
    payload: bytes  # Indented JSON of an ExtractionResult
