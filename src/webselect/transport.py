"""ASGI application and HTTP transport for the scrape endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.routing import Route

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import Lifespan

    from webselect.config import Settings
    from webselect.handler import ScrapeHandler

log = structlog.get_logger()


class AnyMethodRoute(Route):
    """Route that matches every HTTP method, including non-standard verbs.

    Starlette answers 405 for methods outside ``Route.methods``; with
    ``methods`` cleared, both matching and dispatch skip the method check.
    """

    def __init__(self, path: str, endpoint: Callable[[Request], Awaitable[Response]]) -> None:
        super().__init__(path, endpoint)
        self.methods = None


def build_app(
    handler: ScrapeHandler,
    *,
    lifespan: Lifespan[Starlette] | None = None,
) -> Starlette:
    """Mount ``handler`` on every path; it answers 404 itself for anything but ``/``."""
    return Starlette(
        routes=[AnyMethodRoute("/{path:path}", handler.handle)],
        lifespan=lifespan,
    )


def run_http_server(app: Starlette, settings: Settings) -> None:
    """Serve ``app`` until interrupted. Raises SystemExit if the listener cannot bind."""
    log.bind(transport="http").info(
        "http_listening",
        host=settings.server.host,
        port=settings.server.port,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )
