"""Protocol interfaces for swappable components.

The request handler references these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory fetchers and fake clocks
- Future backends (e.g. a shared Redis cache) to be swapped without changing
  handler code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime, timedelta

    from bs4 import BeautifulSoup

    from webselect.models.cache import CacheEntry, CacheKey


class CacheProtocol(Protocol):
    """Interface for the response cache backend."""

    @property
    def ttl(self) -> timedelta: ...

    def now(self) -> datetime: ...

    def get(self, key: CacheKey) -> CacheEntry | None: ...

    def put(self, key: CacheKey, payload: bytes) -> CacheEntry: ...

    def expire(self) -> int: ...


class FetcherProtocol(Protocol):
    """Interface for the HTTP page fetcher."""

    async def fetch(self, url: str) -> BeautifulSoup: ...
