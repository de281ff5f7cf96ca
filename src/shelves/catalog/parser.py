# ABOUTME: Pure functions turning Open Library search docs into Book records.
# ABOUTME: Fills gaps with placeholders and draws a random availability for each book.

import random
from datetime import datetime, timedelta
from typing import Any

from shelves.clock import iso_timestamp
from shelves.library.types import Book

_GENRE_MAP = {
    "fiction": "Fiction",
    "science_fiction": "Science Fiction",
    "fantasy": "Fantasy",
    "mystery": "Mystery",
    "romance": "Romance",
    "thriller": "Thriller",
    "biography": "Biography",
    "history": "History",
    "science": "Science",
    "philosophy": "Philosophy",
    "literature": "Classic Literature",
    "horror": "Horror",
    "adventure": "Adventure",
}

# Genres drawn from when a doc has no subjects.
CATALOG_GENRES = [
    "Fiction",
    "Science Fiction",
    "Fantasy",
    "Mystery",
    "Romance",
    "Thriller",
    "Biography",
    "History",
    "Science",
    "Philosophy",
    "Classic Literature",
    "Contemporary Fiction",
    "Horror",
    "Adventure",
]

DEFAULT_TAGS = ["fiction", "literature"]
DEFAULT_YEAR = 2020
SYNTHETIC_BORROWER = "John Doe"
AVAILABILITY_RATE = 0.7
LOAN_DAYS = 14
COVER_URL = "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg"


def normalize_genre(subject: str) -> str:
    """Map an Open Library subject onto one of the catalog genres.

    Subjects are lowercased with whitespace runs folded to underscores before
    lookup. Anything not in the table becomes "Fiction".
    """
    key = "_".join(subject.lower().split())
    return _GENRE_MAP.get(key, "Fiction")


def _summary(subject: str) -> str:
    return (
        f"A fascinating {subject.lower()} work that explores themes of human nature, "
        "society, and the complexities of modern life. This book has captivated readers "
        "with its compelling narrative and thought-provoking insights."
    )


def _strings(value: Any) -> list[str]:
    """The string items of a list field. Anything other than a list yields nothing."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _year(value: Any) -> int:
    try:
        return int(value) if value else DEFAULT_YEAR
    except (TypeError, ValueError):
        return DEFAULT_YEAR


def _cover_url(value: Any) -> str | None:
    # bool is an int subclass
    if isinstance(value, int) and not isinstance(value, bool):
        return COVER_URL.format(cover_id=value)
    return None


def convert_doc(
    doc: dict[str, Any],
    index: int,
    *,
    rng: random.Random,
    now: datetime,
) -> Book:
    """Build a Book from one search doc.

    Args:
        doc: A search.json doc (key, title, author_name, first_publish_year,
            isbn, subject, cover_i). Fields of the wrong type are treated
            as missing.
        index: Position of the doc in the reply, used for ids of keyless docs.
        rng: Source of randomness for the synthesized genre, isbn and availability.
        now: Reference time for synthesized loan dates.

    Returns:
        A Book. About AVAILABILITY_RATE of books come back available; the rest
        carry a complete synthetic loan.
    """
    subjects = _strings(doc.get("subject"))
    subject = subjects[0] if subjects else rng.choice(CATALOG_GENRES)

    key = str(doc.get("key") or "").replace("/works/", "")
    book_id = key or f"ol-{int(now.timestamp() * 1000)}-{index}"

    authors = _strings(doc.get("author_name"))
    isbns = _strings(doc.get("isbn"))
    title = doc.get("title")

    book = Book(
        id=book_id,
        title=str(title) if title else "Unknown Title",
        author=authors[0] if authors else "Unknown Author",
        genre=normalize_genre(subject),
        year=_year(doc.get("first_publish_year")),
        isbn=isbns[0] if isbns else f"978{rng.randrange(1_000_000_000)}",
        tags=subjects[:3] if subjects else list(DEFAULT_TAGS),
        summary=_summary(subject),
        cover_url=_cover_url(doc.get("cover_i")),
    )

    if rng.random() >= AVAILABILITY_RATE:
        book.is_available = False
        book.borrower = SYNTHETIC_BORROWER
        book.due_date = (now + timedelta(days=LOAN_DAYS)).date().isoformat()
        book.borrowed_date = iso_timestamp(now)
    return book


def convert_docs(
    docs: list[dict[str, Any]], *, rng: random.Random, now: datetime
) -> list[Book]:
    return [convert_doc(doc, i, rng=rng, now=now) for i, doc in enumerate(docs)]
