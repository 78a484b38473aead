"""HTTP fetcher for the i2pd web console page."""

from __future__ import annotations

import logging

import httpx

from exporter import __version__
from exporter.config import settings
from exporter.errors import ConsoleFetchError
from exporter.scraper.models import RawPage

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": f"i2pd-webconsole-exporter/{__version__}",
}


def build_client(timeout: float | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured for console fetches."""
    return httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=timeout if timeout is not None else settings.http_timeout,
        follow_redirects=True,
    )


def _get(client: httpx.Client, url: str) -> RawPage:
    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise ConsoleFetchError(url, f"HTTP request failed: {exc}") from exc

    if not response.is_success:
        raise ConsoleFetchError(url, f"HTTP {response.status_code}")

    try:
        html = response.text
    except (UnicodeDecodeError, LookupError) as exc:
        raise ConsoleFetchError(url, f"Failed to read response body: {exc}") from exc

    return RawPage(url=url, html=html, status_code=response.status_code)


def fetch_console(
    url: str | None = None,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> RawPage:
    """Fetch the web console at *url* and return a :class:`RawPage`.

    Reuses *client* when given (the server passes its pooled client);
    otherwise a short-lived client is opened for this one request.

    Raises:
        ConsoleFetchError: On transport errors, non-2xx statuses, or a body
            that cannot be decoded.
    """
    url = url or settings.web_console_url
    logger.debug("Fetching web console from: %s", url)

    if client is not None:
        return _get(client, url)

    with build_client(timeout) as own_client:
        return _get(own_client, url)
