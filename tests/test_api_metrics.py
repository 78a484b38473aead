"""Tests for the /metrics API endpoint.

The web console is mocked with ``respx``; the app runs under the FastAPI
TestClient so its lifespan opens (and closes) the pooled HTTP client.
"""

from __future__ import annotations

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from exporter.api.app import create_app
from exporter.config import Settings

_CONSOLE = "http://console.test:7070/"
_CONTENT_TYPE = "text/plain; version=0.0.4"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    cfg = Settings(web_console_url=_CONSOLE, http_timeout=5, listen_addr="127.0.0.1:0")
    app = create_app(cfg)
    with respx.mock(assert_all_called=False) as router:
        with TestClient(app) as c:
            c.console = router  # type: ignore[attr-defined]
            yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestMetricsEndpoint:
    def test_success(self, client, console_html: str):
        client.console.get(_CONSOLE).mock(return_value=httpx.Response(200, text=console_html))

        resp = client.get("/metrics")

        assert resp.status_code == 200
        assert resp.headers["content-type"] == _CONTENT_TYPE
        assert 'i2p_network_status_v4{status="OK"} 1' in resp.text
        assert "i2pd_webconsole_exporter_version_info" in resp.text

    def test_empty_console_page(self, client):
        client.console.get(_CONSOLE).mock(return_value=httpx.Response(200, text=""))

        resp = client.get("/metrics")

        assert resp.status_code == 200
        assert resp.text.count("# TYPE ") == 1

    def test_console_error_status(self, client):
        client.console.get(_CONSOLE).mock(return_value=httpx.Response(500, text="oops"))

        resp = client.get("/metrics")

        assert resp.status_code == 500
        assert resp.headers["content-type"] == _CONTENT_TYPE
        assert resp.text == "Error retrieving metrics"

    def test_console_unreachable(self, client):
        client.console.get(_CONSOLE).mock(side_effect=httpx.ConnectError("refused"))

        resp = client.get("/metrics")

        assert resp.status_code == 500
        assert resp.text == "Error retrieving metrics"

    def test_each_request_refetches(self, client, console_html: str):
        route = client.console.get(_CONSOLE).mock(
            side_effect=[
                httpx.Response(200, text=console_html),
                httpx.Response(200, text=""),
            ]
        )

        first = client.get("/metrics")
        second = client.get("/metrics")

        assert route.call_count == 2
        assert "i2p_network_routers" in first.text
        assert "i2p_network_routers" not in second.text


class TestOtherPaths:
    def test_unknown_path_is_404(self, client):
        assert client.get("/").status_code == 404
        assert client.get("/docs").status_code == 404

    def test_404_body_is_plain_text(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "Not Found"
