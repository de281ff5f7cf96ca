# ABOUTME: Aggregate statistics over a book collection and its borrowing history.
# ABOUTME: Pure functions; nothing here reads or writes the store.

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from shelves.clock import parse_timestamp
from shelves.library.types import Book, BorrowingRecord

RECENT_BORROWINGS = 5


@dataclass
class GenreCount:
    genre: str
    count: int
    percentage: int


@dataclass
class LibraryStats:
    total_books: int
    available_books: int
    borrowed_books: int
    popular_genres: list[GenreCount] = field(default_factory=list)
    recent_borrowings: list[BorrowingRecord] = field(default_factory=list)


def percent(part: int, whole: int) -> int:
    """part/whole as a whole-number percentage, rounding halves up. Zero when whole is zero."""
    if whole <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def genre_histogram(books: Sequence[Book], top_n: int | None = None) -> list[GenreCount]:
    """Genre counts, most common first. Ties keep the order genres first appear in."""
    counts = Counter(book.genre for book in books)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    if top_n is not None:
        ranked = ranked[:top_n]
    return [GenreCount(genre, count, percent(count, len(books))) for genre, count in ranked]


def compute_stats(
    books: Sequence[Book],
    borrowings: Iterable[BorrowingRecord] = (),
    top_n: int = 5,
) -> LibraryStats:
    """Summarize a collection.

    Args:
        books: Every book in the collection.
        borrowings: Borrowing records, active or closed.
        top_n: How many genres to keep in popular_genres.

    Returns:
        Counts by availability, the top genres, and the most recently opened
        borrowing records.
    """
    available = sum(1 for book in books if book.is_available)
    recent = sorted(
        borrowings, key=lambda record: parse_timestamp(record.borrowed_date), reverse=True
    )
    return LibraryStats(
        total_books=len(books),
        available_books=available,
        borrowed_books=len(books) - available,
        popular_genres=genre_histogram(books, top_n),
        recent_borrowings=recent[:RECENT_BORROWINGS],
    )
