"""Tests for the HTTP fetch layer (no network, httpx.MockTransport)."""

import httpx

from config.settings import Settings
from models.enums import FetchState
from scrapers.fetcher import describe_failure, fetch_page, interpolate_url

SETTINGS = Settings(user_agent="PreisMonitor-Test/1.0", timeout_seconds=5)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestInterpolateUrl:
    def test_replaces_date(self):
        url = "https://x.org/b?from={date}&to={date}"
        assert interpolate_url(url, "2026-07-04") == "https://x.org/b?from=2026-07-04&to=2026-07-04"

    def test_empty_date(self):
        assert interpolate_url("https://x.org/{date}", "") == "https://x.org/{date}"
        assert interpolate_url("https://x.org/{date}", None) == "https://x.org/{date}"


class TestFetchPage:
    def test_ok(self):
        def handler(request):
            assert request.headers["User-Agent"] == "PreisMonitor-Test/1.0"
            return httpx.Response(
                200, text="<p>Gesamtpreis: 1.234,56 €</p>", headers={"content-type": "text/html"}
            )

        result = fetch_page("https://hotel.example.org/", SETTINGS, client=_client(handler))
        assert result.state == FetchState.OK
        assert result.ok
        assert result.status == 200
        assert "Gesamtpreis" in result.body
        assert result.content_type.startswith("text/html")
        assert describe_failure(result) is None

    def test_http_error(self):
        result = fetch_page(
            "https://hotel.example.org/", SETTINGS, client=_client(lambda r: httpx.Response(503))
        )
        assert result.state == FetchState.HTTP_ERROR
        assert describe_failure(result) == "HTTP 503"

    def test_empty_body(self):
        result = fetch_page(
            "https://hotel.example.org/", SETTINGS, client=_client(lambda r: httpx.Response(200))
        )
        assert result.state == FetchState.EMPTY
        assert describe_failure(result) == "Empty response body"

    def test_blocked(self):
        def handler(request):
            return httpx.Response(200, text="<h1>Please verify you are human</h1>")

        result = fetch_page("https://hotel.example.org/", SETTINGS, client=_client(handler))
        assert result.state == FetchState.BLOCKED
        assert describe_failure(result) == "blocked"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = fetch_page("https://hotel.example.org/", SETTINGS, client=_client(handler))
        assert result.state == FetchState.ERROR
        assert result.body is None
        assert describe_failure(result) == "Request failed: connection refused"
