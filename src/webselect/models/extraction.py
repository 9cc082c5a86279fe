from __future__ import annotations

from pydantic import BaseModel, Field


class ExtractionResult(BaseModel):
    """JSON body returned for a scrape request.

    Field order is the serialized key order: selector, url, elements.
    """

    selector: str
    url: str
    elements: list[str] = Field(default_factory=list)
