# ABOUTME: Unit tests for CatalogHttpClient.
# ABOUTME: Uses a fake httpx transport to exercise GET/POST, retries, and failures.

import json

import httpx
import pytest

from shelves.catalog.http import CatalogFetchError, CatalogHttpClient, HttpClient


class FakeTransport(httpx.BaseTransport):
    """Fake transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})


class FailingTransport(httpx.BaseTransport):
    """Transport that fails every request at the connection level."""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


class TestProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_client_satisfies_protocol(self) -> None:
        """CatalogHttpClient satisfies the HttpClient protocol."""
        assert isinstance(CatalogHttpClient(), HttpClient)


class TestRequests:
    """Tests for successful GET and POST calls."""

    def test_get_returns_json_and_sends_params(self) -> None:
        """GET decodes JSON and encodes query parameters."""
        transport = FakeTransport()
        client = CatalogHttpClient(transport=transport)
        assert client.get("https://example.com/search.json", params={"q": "dune"}) == {
            "ok": True
        }
        assert transport.requests[0].url.params["q"] == "dune"

    def test_post_sends_json_body(self) -> None:
        """POST sends a JSON body and query parameters."""
        transport = FakeTransport()
        client = CatalogHttpClient(transport=transport)
        client.post("https://example.com/gen", json={"a": 1}, params={"key": "k"})
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.params["key"] == "k"
        assert json.loads(request.content) == {"a": 1}

    def test_user_agent_header(self) -> None:
        """Requests carry the shelves User-Agent."""
        transport = FakeTransport()
        CatalogHttpClient(transport=transport).get("https://example.com")
        assert transport.requests[0].headers["user-agent"].startswith("shelves/")


class TestFailures:
    """Tests for error handling and retry."""

    def test_single_shot_by_default(self) -> None:
        """A 503 fails immediately when retries are off."""
        transport = FakeTransport([httpx.Response(503)])
        client = CatalogHttpClient(transport=transport)
        with pytest.raises(CatalogFetchError, match="503"):
            client.get("https://example.com")
        assert len(transport.requests) == 1

    def test_non_retryable_status(self) -> None:
        """A 404 is never retried."""
        transport = FakeTransport([httpx.Response(404)])
        client = CatalogHttpClient(max_retries=3, retry_delay=0.0, transport=transport)
        with pytest.raises(CatalogFetchError, match="404"):
            client.get("https://example.com")
        assert len(transport.requests) == 1

    def test_retries_then_succeeds(self) -> None:
        """Retryable statuses are retried up to max_retries."""
        transport = FakeTransport(
            [httpx.Response(429), httpx.Response(500), httpx.Response(200, json={"n": 1})]
        )
        client = CatalogHttpClient(max_retries=2, retry_delay=0.0, transport=transport)
        assert client.get("https://example.com") == {"n": 1}
        assert len(transport.requests) == 3

    def test_exhausted_retries(self) -> None:
        """Running out of retries reports the attempt count."""
        transport = FakeTransport([httpx.Response(502), httpx.Response(502)])
        client = CatalogHttpClient(max_retries=1, retry_delay=0.0, transport=transport)
        with pytest.raises(CatalogFetchError, match="after 2 attempts"):
            client.get("https://example.com")

    def test_connection_error_wrapped(self) -> None:
        """Transport errors surface as CatalogFetchError with the cause chained."""
        client = CatalogHttpClient(transport=FailingTransport())
        with pytest.raises(CatalogFetchError) as excinfo:
            client.get("https://example.com")
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    def test_invalid_json(self) -> None:
        """A 200 with a non-JSON body is a fetch error."""
        transport = FakeTransport([httpx.Response(200, content=b"<html>")])
        client = CatalogHttpClient(transport=transport)
        with pytest.raises(CatalogFetchError, match="Invalid JSON"):
            client.get("https://example.com")
