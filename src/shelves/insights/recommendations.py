# ABOUTME: Rule-based book recommendations drawn from a small curated pool.
# ABOUTME: Picks by genre and skips titles the caller already owns.

from collections.abc import Iterable

from shelves.library.types import Book


def _pool() -> dict[str, list[Book]]:
    return {
        "Fiction": [
            Book(
                id="rec-1",
                title="The Seven Husbands of Evelyn Hugo",
                author="Taylor Jenkins Reid",
                genre="Fiction",
                year=2017,
                isbn="9781501161933",
                tags=["romance", "hollywood", "lgbtq"],
                summary="A reclusive Hollywood icon finally tells her story to a young journalist.",
            ),
            Book(
                id="rec-2",
                title="Where the Crawdads Sing",
                author="Delia Owens",
                genre="Fiction",
                year=2018,
                isbn="9780735219090",
                tags=["mystery", "nature", "coming of age"],
                summary=(
                    "A mystery about a young woman who raised herself in the marshes "
                    "of North Carolina."
                ),
            ),
        ],
        "Science Fiction": [
            Book(
                id="rec-3",
                title="The Martian",
                author="Andy Weir",
                genre="Science Fiction",
                year=2011,
                isbn="9780553418026",
                tags=["space", "survival", "humor"],
                summary="An astronaut stranded on Mars must use his ingenuity to survive.",
            ),
            Book(
                id="rec-4",
                title="Klara and the Sun",
                author="Kazuo Ishiguro",
                genre="Science Fiction",
                year=2021,
                isbn="9780571364909",
                tags=["ai", "love", "philosophy"],
                summary="An artificial friend observes the world with extraordinary perception.",
            ),
        ],
        "Fantasy": [
            Book(
                id="rec-5",
                title="The Name of the Wind",
                author="Patrick Rothfuss",
                genre="Fantasy",
                year=2007,
                isbn="9780756404079",
                tags=["magic", "music", "adventure"],
                summary="A legendary figure tells his own story of love, loss, and magic.",
            ),
            Book(
                id="rec-6",
                title="The Fifth Season",
                author="N.K. Jemisin",
                genre="Fantasy",
                year=2015,
                isbn="9780316229296",
                tags=["dystopian", "magic", "award-winning"],
                summary="A world of devastating earthquakes and supernatural powers.",
            ),
        ],
    }


def recommendation_genres() -> list[str]:
    return list(_pool())


def recommend_books(
    current_books: Iterable[Book],
    target_book: Book | None = None,
    genre: str | None = None,
    limit: int = 5,
) -> list[Book]:
    """Suggest books the caller does not already have.

    The target book's genre wins over genre. When neither names a pooled
    genre, candidates come from the whole pool. Titles already in
    current_books are skipped, ignoring case.
    """
    pool = _pool()
    wanted = (target_book.genre if target_book is not None else None) or genre
    if wanted and wanted in pool:
        candidates = pool[wanted]
    else:
        candidates = [book for books in pool.values() for book in books]

    owned = {book.title.lower() for book in current_books}
    return [book for book in candidates if book.title.lower() not in owned][:limit]
