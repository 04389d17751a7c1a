"""Tests for the HTTP API.

All tests use the FastAPI TestClient.  The fetcher is patched at the pipeline
seam so no network calls are made.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from bs4.exceptions import ParserRejectedMarkup
from fastapi.testclient import TestClient

from contentaudit.api.app import create_app
from contentaudit.scraper.errors import FetchTimeout, TransportFailure, UpstreamStatusFailure
from contentaudit.scraper.models import FetchResult

_PAGE = (
    "<html><body><nav>menu</nav>"
    "<article>  Hello   world.\n\n\nBye. </article>"
    "</body></html>"
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    with TestClient(create_app()) as c:
        yield c


def _page(url: str, html: str = _PAGE) -> FetchResult:
    return FetchResult(source_url=url, raw_markup=html, status_code=200)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestFetchUrlContent:
    def test_success(self, client):
        url = "https://example.com/post"
        with patch("contentaudit.pipeline.fetch_url", return_value=_page(url)):
            resp = client.post("/fetch-url-content", json={"url": url})

        assert resp.status_code == 200
        assert resp.json() == {"content": "Hello world.\nBye.", "url": url}

    def test_missing_url(self, client):
        resp = client.post("/fetch-url-content", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_empty_url(self, client):
        resp = client.post("/fetch-url-content", json={"url": ""})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_upstream_status(self, client):
        with patch(
            "contentaudit.pipeline.fetch_url",
            side_effect=UpstreamStatusFailure(404, "Not Found"),
        ):
            resp = client.post("/fetch-url-content", json={"url": "https://example.com/x"})

        assert resp.status_code == 502
        assert resp.json() == {"error": "Failed to fetch URL: 404 Not Found"}

    def test_transport_failure(self, client):
        with patch(
            "contentaudit.pipeline.fetch_url",
            side_effect=TransportFailure("Failed to fetch https://down.example.com/"),
        ):
            resp = client.post("/fetch-url-content", json={"url": "https://down.example.com/"})

        assert resp.status_code == 502
        assert "error" in resp.json()

    def test_timeout(self, client):
        with patch("contentaudit.pipeline.fetch_url", side_effect=FetchTimeout("Timed out")):
            resp = client.post("/fetch-url-content", json={"url": "https://slow.example.com/"})

        assert resp.status_code == 504
        assert resp.json() == {"error": "Timed out"}

    def test_no_content_region(self, client):
        url = "https://example.com/head-only"
        page = _page(url, "<html><head><title>t</title></head></html>")
        with patch("contentaudit.pipeline.fetch_url", return_value=page):
            resp = client.post("/fetch-url-content", json={"url": url})

        assert resp.status_code == 422
        assert resp.json() == {"error": "Could not find main content"}

    def test_malformed_json_body(self, client):
        resp = client.post(
            "/fetch-url-content",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_unexpected_error_answers_500(self):
        with TestClient(create_app(), raise_server_exceptions=False) as client:
            with patch("contentaudit.pipeline.fetch_url", side_effect=RuntimeError("boom")):
                resp = client.post("/fetch-url-content", json={"url": "https://example.com/"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "boom"}

    def test_failure_logged_once(self, client, caplog):
        with caplog.at_level(logging.DEBUG):
            with patch(
                "contentaudit.pipeline.fetch_url",
                side_effect=UpstreamStatusFailure(404, "Not Found"),
            ):
                client.post("/fetch-url-content", json={"url": "https://example.com/x"})

        warnings = [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert len(warnings) == 1
        assert "https://example.com/x" in warnings[0].getMessage()


class TestExtractEndpoint:
    def test_extracts_posted_markup(self, client):
        resp = client.post("/extract", json={"html": _PAGE, "url": "https://example.com/"})
        assert resp.status_code == 200
        assert resp.json() == {"content": "Hello world.\nBye.", "url": "https://example.com/"}

    def test_url_is_optional(self, client):
        resp = client.post("/extract", json={"html": "<body><p>Hi</p></body>"})
        assert resp.status_code == 200
        assert resp.json() == {"content": "Hi", "url": ""}

    def test_rejected_markup_answers_422(self, client):
        with patch(
            "contentaudit.scraper.document.BeautifulSoup",
            side_effect=ParserRejectedMarkup("unreadable"),
        ):
            resp = client.post("/extract", json={"html": "<body>x</body>"})

        assert resp.status_code == 422
        assert resp.json()["error"].startswith("Failed to parse HTML")


class TestCors:
    def test_preflight_allows_any_origin(self, client):
        resp = client.options(
            "/fetch-url-content",
            headers={
                "Origin": "https://audit.example.org",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_simple_request_carries_cors_header(self, client):
        resp = client.get("/health", headers={"Origin": "https://audit.example.org"})
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
        assert resp.headers["access-control-allow-origin"] == "*"
