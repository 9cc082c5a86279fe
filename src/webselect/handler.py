"""Request handler for the scrape endpoint.

Receives the cache and fetcher by constructor injection, then orchestrates
URL normalization / cache lookup / network fetch / selector extraction /
serialization / cache store, and returns the HTTP response.
No server bootstrap here: transport.py mounts the handler on the app.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic_core import PydanticSerializationError
from starlette.responses import PlainTextResponse, Response

from webselect.errors import ScrapeError, SerializationError
from webselect.extractor import extract_elements
from webselect.models.cache import CacheEntry, CacheKey
from webselect.models.extraction import ExtractionResult
from webselect.urls import normalize_url

if TYPE_CHECKING:
    from starlette.requests import Request

    from webselect.protocols import CacheProtocol, FetcherProtocol

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class ScrapeHandler:
    """Serves ``/``: fetch a page, select elements, answer with cached JSON."""

    def __init__(self, cache: CacheProtocol, fetcher: FetcherProtocol) -> None:
        self._cache = cache
        self._fetcher = fetcher

    async def handle(self, request: Request) -> Response:
        log = structlog.get_logger().bind(path=request.url.path)
        log.info(
            "request_received",
            method=request.method,
            remote=request.client.host if request.client else None,
        )

        if request.url.path != "/":
            return Response(status_code=404)

        raw_url, selector, raw = await _read_params(request)
        url = normalize_url(raw_url)
        key = CacheKey(url, selector, raw)
        log = log.bind(url=url, selector=selector, raw=raw)

        cached = self._cache.get(key)
        if cached is not None:
            log.info("cache_hit")
            return self._json_response(cached.payload, self._max_age(cached))

        log.info("cache_miss")
        try:
            doc = await self._fetcher.fetch(url)
            result = ExtractionResult(
                selector=selector,
                url=url,
                elements=extract_elements(doc, selector, raw),
            )
            payload = _serialize(result)
        except ScrapeError as exc:
            log.warning("request_failed", code=exc.code, message=exc.message)
            return PlainTextResponse(exc.message, status_code=500)
        except Exception:
            log.error("request_unexpected_error", exc_info=True)
            raise

        self._cache.put(key, payload)
        log.info("response_cached", element_count=len(result.elements))
        return self._json_response(payload, int(self._cache.ttl.total_seconds()))

    def _max_age(self, entry: CacheEntry) -> int:
        """Seconds between now and the entry's expiry instant.

        A hit implies the entry has not expired, so this is the remaining
        freshness lifetime.
        """
        expires_at = entry.created_at + self._cache.ttl
        return round(abs((self._cache.now() - expires_at).total_seconds()))

    @staticmethod
    def _json_response(payload: bytes, max_age: int) -> Response:
        return Response(
            payload,
            media_type="application/json",
            headers={"Cache-Control": f"public, max-age={max_age}, immutable"},
        )


async def _read_params(request: Request) -> tuple[str, str, bool]:
    """Collect url, selector and raw from the query string and form body.

    Query string values take precedence over form values, and the first
    occurrence of a repeated key wins.
    """
    params: dict[str, str] = {}
    for k, v in request.query_params.multi_items():
        params.setdefault(k, v)

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        for k, v in form.multi_items():
            if isinstance(v, str):
                params.setdefault(k, v)

    return params.get("url", ""), params.get("selector", ""), "raw" in params


def _serialize(result: ExtractionResult) -> bytes:
    try:
        return result.model_dump_json(indent=2).encode("utf-8")
    except PydanticSerializationError as exc:
        raise SerializationError(f"Failed to encode response: {exc}") from exc
