# ABOUTME: External book catalog: Open Library search with a built-in fallback list.
# ABOUTME: Exports the adapter, its HTTP client, and the fallback catalog.

from shelves.catalog.fallback import FALLBACK_BOOKS, fallback_books
from shelves.catalog.http import CatalogFetchError, CatalogHttpClient, HttpClient
from shelves.catalog.openlibrary import MIN_CATALOG_SIZE, OpenLibraryCatalog
from shelves.catalog.parser import convert_doc, normalize_genre

__all__ = [
    "FALLBACK_BOOKS",
    "MIN_CATALOG_SIZE",
    "CatalogFetchError",
    "CatalogHttpClient",
    "HttpClient",
    "OpenLibraryCatalog",
    "convert_doc",
    "fallback_books",
    "normalize_genre",
]
