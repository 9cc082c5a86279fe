"""Background scheduler coroutine for cache expiry."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from webselect.protocols import CacheProtocol

log = structlog.get_logger()


async def run_cache_expiry_scheduler(cache: CacheProtocol, interval_seconds: float) -> None:
    """Drop expired cache entries every ``interval_seconds`` until cancelled.

    Expired entries are already invisible to ``get``; this only reclaims
    their memory between accesses.
    """
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            cache.expire()
        except Exception:
            log.warning("cache_expiry_scheduler_error", exc_info=True)
