# ABOUTME: The seed catalog written the first time a book collection is read.
# ABOUTME: Stored in the same JSON shape as persisted books.

from typing import Any

from shelves.library.mapping import book_from_dict
from shelves.library.types import Book

SEED_BOOKS: list[dict[str, Any]] = [
    {
        "id": "1",
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "genre": "Classic Literature",
        "year": 1925,
        "isbn": "9780743273565",
        "tags": ["American Literature", "Jazz Age", "Classic"],
        "summary": (
            "A masterpiece of American literature set in the Jazz Age, exploring themes "
            "of wealth, love, and the American Dream through the eyes of Nick Carraway."
        ),
        "isAvailable": True,
    },
    {
        "id": "2",
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "genre": "Classic Literature",
        "year": 1960,
        "isbn": "9780061120084",
        "tags": ["American Literature", "Social Justice", "Coming of Age"],
        "summary": (
            "A profound tale of moral courage in the American South, told through the "
            "perspective of Scout Finch as her father defends an innocent Black man."
        ),
        "isAvailable": False,
        "borrower": "Sarah Johnson",
        "dueDate": "2024-08-15",
        "borrowedDate": "2024-08-01",
    },
    {
        "id": "3",
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "year": 1965,
        "isbn": "9780441172719",
        "tags": ["Space Opera", "Politics", "Ecology"],
        "summary": (
            "An epic science fiction saga set on the desert planet Arrakis, following "
            "Paul Atreides as he navigates politics, religion, and ecology."
        ),
        "isAvailable": True,
    },
    {
        "id": "4",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "Romance",
        "year": 1813,
        "isbn": "9780141439518",
        "tags": ["British Literature", "Romance", "Social Commentary"],
        "summary": (
            "A witty and romantic tale of Elizabeth Bennet and Mr. Darcy, exploring themes "
            "of love, class, and social expectations in Regency England."
        ),
        "isAvailable": True,
    },
]


def seed_books() -> list[Book]:
    """Fresh Book instances for the seed catalog."""
    return [book_from_dict(data) for data in SEED_BOOKS]
