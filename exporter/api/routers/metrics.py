"""Metrics endpoint.

Routes
------
GET /metrics
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from exporter.errors import ConsoleFetchError
from exporter.metrics.renderer import CONTENT_TYPE
from exporter.pipeline import collect_metrics
from exporter.scraper.fetcher import fetch_console

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_BODY = "Error retrieving metrics"


def _exposition(body: str, status_code: int = 200) -> PlainTextResponse:
    # Set the header directly so Starlette does not append a charset.
    return PlainTextResponse(
        body,
        status_code=status_code,
        headers={"Content-Type": CONTENT_TYPE},
    )


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.get("/metrics")
def metrics(request: Request) -> PlainTextResponse:
    """Fetch the web console and return its metrics in exposition format.

    A plain ``def`` so FastAPI runs it in the worker thread pool; the fetch
    blocks.
    """
    cfg = request.app.state.settings
    try:
        page = fetch_console(cfg.web_console_url, client=request.app.state.http)
    except ConsoleFetchError as exc:
        logger.error("Failed to fetch metrics: %s", exc)
        return _exposition(ERROR_BODY, status_code=500)
    return _exposition(collect_metrics(page.html))
