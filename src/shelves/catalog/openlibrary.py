# ABOUTME: Open Library catalog adapter: popular, search, and trending book lists.
# ABOUTME: Never raises; failures and thin results fall back to the built-in catalog.

import logging
import random
from typing import Any

from shelves.catalog.fallback import fallback_books
from shelves.catalog.http import CatalogFetchError, HttpClient
from shelves.catalog.parser import convert_docs
from shelves.clock import Clock, utc_now
from shelves.library.types import Book

logger = logging.getLogger(__name__)

OPEN_LIBRARY_URL = "https://openlibrary.org"
SEARCH_URL = f"{OPEN_LIBRARY_URL}/search.json"
SEARCH_FIELDS = "key,title,author_name,first_publish_year,isbn,subject,cover_i"

MIN_CATALOG_SIZE = 25
POPULAR_LIMIT = 50
TRENDING_LIMIT = 25
TRENDING_QUERIES = [
    "harry potter",
    "lord of the rings",
    "game of thrones",
    "dune",
    "sherlock holmes",
    "jane austen",
]


class OpenLibraryCatalog:
    """Fetches book lists from the Open Library search API.

    Every method returns a usable list: the fallback catalog stands in when
    the request fails or the reply is too small to be useful.
    """

    def __init__(
        self,
        http_client: HttpClient,
        rng: random.Random | None = None,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._http = http_client
        self._rng = rng or random.Random()
        self._clock = clock

    def fetch_popular_books(self) -> list[Book]:
        """Top-rated books, or the fallback catalog if fewer than MIN_CATALOG_SIZE come back."""
        books = self._search({"q": "*", "sort": "rating desc", "limit": POPULAR_LIMIT})
        if books is None or len(books) < MIN_CATALOG_SIZE:
            logger.warning(
                "Open Library returned %s popular books, using the fallback catalog",
                "no" if books is None else len(books),
            )
            return fallback_books()
        logger.info("Fetched %d popular books from Open Library", len(books))
        return books

    def search(self, query: str = "popular", limit: int = 30) -> list[Book]:
        """Free-text search. Falls back only on failure or an empty result."""
        books = self._search({"q": query, "limit": limit})
        if not books:
            logger.warning("Open Library search for %r failed or was empty", query)
            return fallback_books()
        return books

    def trending_books(self) -> list[Book]:
        """Books matching any of TRENDING_QUERIES, with the same size floor as popular."""
        query = " OR ".join(TRENDING_QUERIES)
        books = self._search({"q": query, "limit": TRENDING_LIMIT})
        if books is None or len(books) < MIN_CATALOG_SIZE:
            logger.warning("Too few trending books from Open Library, using the fallback catalog")
            return fallback_books()
        return books

    def _search(self, params: dict[str, Any]) -> list[Book] | None:
        """Run one search request. None signals a failed request or malformed reply."""
        try:
            data = self._http.get(SEARCH_URL, params={**params, "fields": SEARCH_FIELDS})
        except CatalogFetchError as exc:
            logger.warning("Open Library request failed: %s", exc)
            return None

        if not isinstance(data, dict):
            logger.warning("Open Library reply is not a JSON object")
            return None
        docs = data.get("docs")
        if not isinstance(docs, list):
            logger.warning("Open Library reply has no docs list")
            return None
        return convert_docs(
            [doc for doc in docs if isinstance(doc, dict)], rng=self._rng, now=self._clock()
        )
