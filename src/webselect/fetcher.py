"""HTTP page fetcher.

All network I/O for scraping goes through a single Fetcher instance shared
across requests. The Fetcher receives an httpx.AsyncClient via constructor
injection; the application lifespan owns the client lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from bs4 import BeautifulSoup, ParserRejectedMarkup

from webselect.errors import HTTPStatusError, ParseError, TransportError

if TYPE_CHECKING:
    from webselect.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
    )


def parse_document(content: bytes) -> BeautifulSoup:
    """Parse an HTML body into a queryable tree.

    Uses the HTML5 tree construction algorithm, so implied elements
    (html, head, body, tbody) exist even when the page omits them. Bytes are
    passed through untouched so the parser can sniff the charset.
    """
    try:
        return BeautifulSoup(content, "html5lib")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Failed to parse document: {exc}") from exc


class Fetcher:
    """Loads a single page and hands back its parsed document."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> BeautifulSoup:
        """GET ``url`` and parse the body.

        Raises TransportError when the request cannot be completed,
        HTTPStatusError for any final status other than 200, and ParseError
        when the body is rejected by the parser. The response stream is closed
        on every path.
        """
        log.info("loading_site", url=url)

        try:
            async with self._client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise HTTPStatusError(response.status_code, response.reason_phrase)
                content = await response.aread()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Network error fetching {url}: {exc}") from exc

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(content),
        )
        return parse_document(content)
