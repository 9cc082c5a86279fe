"""Service entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Construct the cache, HTTP client, fetcher and handler, and own their
  lifecycle via the Starlette lifespan
- Parse CLI overrides and start the HTTP transport
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

import structlog
import typer

from webselect import __version__
from webselect.cache import ResponseCache
from webselect.config import Settings
from webselect.fetcher import Fetcher, build_http_client
from webselect.handler import ScrapeHandler
from webselect.schedulers import run_cache_expiry_scheduler
from webselect.transport import build_app, run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.applications import Starlette

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Application wiring
# ---------------------------------------------------------------------------


def create_app(settings: Settings) -> Starlette:
    """Build the ASGI app with one cache and one HTTP client for its lifetime."""
    cache = ResponseCache(
        max_entries=settings.cache.max_entries,
        ttl_seconds=settings.cache.ttl_seconds,
    )
    http_client = build_http_client(settings.fetcher)
    handler = ScrapeHandler(cache=cache, fetcher=Fetcher(http_client))

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        expiry_task = asyncio.create_task(
            run_cache_expiry_scheduler(cache, settings.cache.cleanup_interval_seconds)
        )
        log.info(
            "server_started",
            version=__version__,
            cache_max_entries=settings.cache.max_entries,
            cache_ttl_seconds=settings.cache.ttl_seconds,
        )
        try:
            yield
        finally:
            expiry_task.cancel()
            with suppress(asyncio.CancelledError):
                await expiry_task
            await http_client.aclose()
            cache.clear()
            log.info("server_stopping")

    return build_app(handler, lifespan=lifespan)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

cli = typer.Typer(add_completion=False)


@cli.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Host to listen on."),
    port: int | None = typer.Option(None, "--port", help="Port to listen on."),
) -> None:
    """Run the scrape service."""
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    settings = Settings(server=overrides) if overrides else Settings()
    _setup_logging(settings)

    log.info("server_starting", version=__version__)
    run_http_server(create_app(settings), settings)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
