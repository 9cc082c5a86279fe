"""In-memory response cache with LRU eviction and per-entry TTL.

Holds serialized response bodies keyed by CacheKey. Bounded in both size
(least-recently-used entry evicted on overflow) and time (an entry whose age
has reached the TTL is never returned, whether or not it has been physically
removed yet). Expired entries are dropped lazily on access and in bulk by
``expire()``, which the background scheduler calls periodically.

All operations take an internal lock, so concurrent requests see a
linearizable sequence of get/put calls.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog
from cachetools import TTLCache

from webselect.models.cache import CacheEntry, CacheKey

log = structlog.get_logger()


class _EvictionLoggingTTLCache(TTLCache):
    """TTLCache that reports capacity evictions."""

    def popitem(self) -> tuple[CacheKey, CacheEntry]:
        key, value = super().popitem()
        log.debug("cache_evicted", url=key.url, selector=key.selector, raw=key.raw)
        return key, value


class ResponseCache:
    """Bounded LRU cache of serialized responses, implementing CacheProtocol."""

    def __init__(
        self,
        max_entries: int = 10,
        ttl_seconds: int = 3600,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._clock = clock
        self._ttl = timedelta(seconds=ttl_seconds)
        self._lock = threading.Lock()
        self._entries: TTLCache[CacheKey, CacheEntry] = _EvictionLoggingTTLCache(
            maxsize=max_entries,
            ttl=ttl_seconds,
            timer=clock,
        )

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return int(self._entries.maxsize)

    def now(self) -> datetime:
        """Current time on the cache's clock, as an aware UTC datetime."""
        return datetime.fromtimestamp(self._clock(), UTC)

    def get(self, key: CacheKey) -> CacheEntry | None:
        """Return the live entry for ``key`` and mark it most recently used.

        Returns ``None`` on a miss or when the entry has reached its TTL.
        """
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, payload: bytes) -> CacheEntry:
        """Store ``payload`` under ``key`` stamped with the current time.

        Replaces any existing entry for the key and makes it most recently
        used. Evicts the least recently used entry when the cache is full.
        """
        with self._lock:
            entry = CacheEntry(created_at=self.now(), payload=payload)
            self._entries[key] = entry
            return entry

    def expire(self) -> int:
        """Physically drop every expired entry. Returns how many were removed."""
        with self._lock:
            removed = len(self._entries.expire())
        if removed:
            log.info("cache_expired", removed=removed)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
