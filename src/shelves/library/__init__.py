# ABOUTME: Public API for the Shelves book catalog layer.
# ABOUTME: Exports record types, the book and favorites stores, and scopes.

from shelves.library.books import ALL_GENRES, GLOBAL_SCOPE, BookStore, Scope
from shelves.library.favorites import FavoritesStore, ToggleResult
from shelves.library.types import Book, BookInput, BookPatch, BorrowingRecord, UserFavorite

__all__ = [
    "ALL_GENRES",
    "GLOBAL_SCOPE",
    "Book",
    "BookInput",
    "BookPatch",
    "BookStore",
    "BorrowingRecord",
    "FavoritesStore",
    "Scope",
    "ToggleResult",
    "UserFavorite",
]
