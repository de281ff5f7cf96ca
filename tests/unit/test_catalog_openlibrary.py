# ABOUTME: Unit tests for OpenLibraryCatalog.
# ABOUTME: Uses a FakeHttpClient to test requests, thresholds, and the fallback catalog.

import logging
import random
from typing import Any

import pytest

from shelves.catalog.fallback import FALLBACK_BOOKS, fallback_books
from shelves.catalog.http import CatalogFetchError, HttpClient
from shelves.catalog.openlibrary import MIN_CATALOG_SIZE, SEARCH_URL, OpenLibraryCatalog
from tests.fixtures.clock import FakeClock
from tests.fixtures.openlibrary_responses import (
    SEARCH_RESPONSE_DUNE,
    SEARCH_RESPONSE_EMPTY,
    SEARCH_RESPONSE_MALFORMED,
    search_response,
)


class FakeHttpClient:
    """Fake HTTP client that returns one canned response or raises."""

    def __init__(self, response: Any) -> None:
        self._response = response
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append((url, dict(params or {})))
        if isinstance(self._response, Exception):
            raise self._response
        return self._response

    def post(
        self, url: str, json: dict[str, Any], params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        raise AssertionError("catalog never posts")


def _catalog(response: Any) -> tuple[OpenLibraryCatalog, FakeHttpClient]:
    client = FakeHttpClient(response)
    return OpenLibraryCatalog(client, random.Random(0), clock=FakeClock()), client


class TestFallbackCatalog:
    """Tests for the built-in catalog."""

    def test_size_and_uniqueness(self) -> None:
        """The fallback holds 45 distinct books."""
        books = fallback_books()
        assert len(books) == len(FALLBACK_BOOKS) == 45
        assert len({b.id for b in books}) == 45

    def test_loans_are_complete(self) -> None:
        """Books on loan carry borrower, due date and borrowed date; others carry none."""
        books = fallback_books()
        on_loan = [b for b in books if not b.is_available]
        assert len(on_loan) == 8
        assert all(b.borrower and b.due_date and b.borrowed_date for b in on_loan)
        assert all(b.borrower is None for b in books if b.is_available)

    def test_fresh_copies(self) -> None:
        """Callers get independent objects."""
        first = fallback_books()
        first[0].title = "changed"
        assert fallback_books()[0].title == "The Great Gatsby"


class TestPopular:
    """Tests for fetch_popular_books."""

    def test_sends_popular_query(self) -> None:
        """The request asks for 50 top-rated docs with the needed fields."""
        catalog, client = _catalog(search_response(30))
        catalog.fetch_popular_books()
        url, params = client.calls[0]
        assert url == SEARCH_URL
        assert params["q"] == "*"
        assert params["sort"] == "rating desc"
        assert params["limit"] == 50
        assert "author_name" in params["fields"]

    def test_enough_results_used(self) -> None:
        """With at least MIN_CATALOG_SIZE docs the fetched books are returned."""
        catalog, _ = _catalog(search_response(MIN_CATALOG_SIZE))
        books = catalog.fetch_popular_books()
        assert len(books) == MIN_CATALOG_SIZE
        assert books[0].id == "OL1W"

    def test_too_few_results_fall_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Fewer than MIN_CATALOG_SIZE docs yields the fallback catalog."""
        catalog, _ = _catalog(search_response(MIN_CATALOG_SIZE - 1))
        with caplog.at_level(logging.WARNING):
            books = catalog.fetch_popular_books()
        assert [b.id for b in books] == [b.id for b in fallback_books()]
        assert "fallback" in caplog.text

    def test_failure_falls_back(self) -> None:
        """A failed request yields the fallback catalog, never an empty list."""
        catalog, _ = _catalog(CatalogFetchError("boom"))
        books = catalog.fetch_popular_books()
        assert len(books) >= MIN_CATALOG_SIZE

    def test_malformed_reply_falls_back(self) -> None:
        """A reply without a docs list is treated as a failure."""
        catalog, _ = _catalog(SEARCH_RESPONSE_MALFORMED)
        assert len(catalog.fetch_popular_books()) == 45

    @pytest.mark.parametrize("reply", [[], None, "docs", 42, [{"docs": []}]])
    def test_non_object_reply_falls_back(
        self, reply: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A JSON reply that is not an object yields the fallback catalog."""
        catalog, _ = _catalog(reply)
        with caplog.at_level(logging.WARNING):
            books = catalog.fetch_popular_books()
        assert len(books) == 45
        assert "not a JSON object" in caplog.text


class TestSearch:
    """Tests for free-text search."""

    def test_small_result_kept(self) -> None:
        """Search keeps any non-empty result, however small."""
        catalog, client = _catalog(SEARCH_RESPONSE_DUNE)
        books = catalog.search("dune", limit=5)
        assert [b.title for b in books] == ["Dune"]
        assert client.calls[0][1]["q"] == "dune"
        assert client.calls[0][1]["limit"] == 5

    def test_empty_result_falls_back(self) -> None:
        """Zero results yields the fallback catalog."""
        catalog, _ = _catalog(SEARCH_RESPONSE_EMPTY)
        assert len(catalog.search("zzzz")) == 45

    def test_failure_falls_back(self) -> None:
        """A failed search yields the fallback catalog."""
        catalog, _ = _catalog(CatalogFetchError("boom"))
        assert len(catalog.search()) == 45

    @pytest.mark.parametrize("reply", [[], None, "dune"])
    def test_non_object_reply_falls_back(self, reply: Any) -> None:
        """Search treats a non-object reply as a failure."""
        catalog, _ = _catalog(reply)
        assert len(catalog.search("dune")) == 45

    def test_default_query(self) -> None:
        """The default query is 'popular' with limit 30."""
        catalog, client = _catalog(SEARCH_RESPONSE_DUNE)
        catalog.search()
        assert client.calls[0][1]["q"] == "popular"
        assert client.calls[0][1]["limit"] == 30


class TestTrending:
    """Tests for trending_books."""

    def test_or_joined_query(self) -> None:
        """Trending topics are OR-joined into one query."""
        catalog, client = _catalog(search_response(25))
        books = catalog.trending_books()
        assert len(books) == 25
        query = client.calls[0][1]["q"]
        assert query.startswith("harry potter OR lord of the rings")
        assert query.endswith("jane austen")

    def test_thin_result_falls_back(self) -> None:
        """Fewer than MIN_CATALOG_SIZE trending books yields the fallback."""
        catalog, _ = _catalog(SEARCH_RESPONSE_DUNE)
        assert len(catalog.trending_books()) == 45


class TestProtocolFit:
    """The fake client used here matches the real protocol."""

    def test_fake_satisfies_protocol(self) -> None:
        """FakeHttpClient implements HttpClient."""
        assert isinstance(FakeHttpClient({}), HttpClient)
