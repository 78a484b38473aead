"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single pooled ``httpx.Client`` (shared across
all requests via ``request.app.state.http``) configured with the request
timeout.  On shutdown it closes the client cleanly.

Routers
-------

    /metrics   — scrape the web console and return Prometheus text

Every other path answers a plain-text 404.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from exporter import __version__
from exporter.config import Settings, settings as default_settings
from exporter.scraper.fetcher import build_client

from exporter.api.routers import metrics as metrics_router

logger = logging.getLogger(__name__)


async def not_found(request: Request, exc: Exception) -> PlainTextResponse:
    """Answer unknown paths with a plain-text body instead of JSON."""
    return PlainTextResponse("Not Found", status_code=404)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the HTTP client on startup and close it on shutdown."""
    cfg: Settings = app.state.settings
    client = build_client(cfg.http_timeout)
    app.state.http = client
    logger.info("Scraping i2pd web console at %s", cfg.web_console_url)
    try:
        yield
    finally:
        client.close()
        logger.info("Shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="i2pd web-console exporter",
        description=(
            "Prometheus exporter for i2pd. Scrapes the router's web console "
            "on every request and republishes its figures as metrics."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings or default_settings

    app.include_router(metrics_router.router, tags=["metrics"])
    app.add_exception_handler(404, not_found)

    return app


# Module-level instance used by uvicorn:
#   uvicorn exporter.api.app:app
app = create_app()
