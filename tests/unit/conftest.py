"""Unit test fixtures."""

from __future__ import annotations

import pytest

from webselect.cache import ResponseCache


@pytest.fixture()
def cache(clock) -> ResponseCache:
    """Three-slot cache with a one hour TTL driven by the fake clock."""
    return ResponseCache(max_entries=3, ttl_seconds=3600, clock=clock)
