"""Integration test fixtures.

Wires the real handler, cache and fetcher into the Starlette app and drives
it through httpx's ASGI transport. Upstream pages are served by respx, so no
socket is opened in either direction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from webselect.cache import ResponseCache
from webselect.config import FetcherSettings
from webselect.fetcher import Fetcher, build_http_client
from webselect.handler import ScrapeHandler
from webselect.transport import build_app

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from tests.conftest import FakeClock


@pytest.fixture()
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(max_entries=10, ttl_seconds=3600, clock=clock)


@pytest.fixture()
def upstream() -> Iterator[respx.MockRouter]:
    """Mock router for every page the service fetches."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
async def client(
    cache: ResponseCache, upstream: respx.MockRouter
) -> AsyncIterator[httpx.AsyncClient]:
    """Client talking to the ASGI app in-process."""
    async with build_http_client(FetcherSettings()) as upstream_client:
        handler = ScrapeHandler(cache=cache, fetcher=Fetcher(upstream_client))
        app = build_app(handler)
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        ) as api:
            yield api
