# ABOUTME: Library insight narratives and book summaries, AI-generated when a generator is set.
# ABOUTME: Falls back to deterministic text built from the same aggregates on any failure.

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from shelves.insights.gemini import GenerationError, TextGenerator
from shelves.insights.stats import GenreCount, genre_histogram, percent
from shelves.library.types import Book

logger = logging.getLogger(__name__)

TOP_GENRES = 5
SAMPLE_TITLES = 10
DEFAULT_AI_SCORE = 7

RULE_RECOMMENDATIONS = [
    "Consider exploring new genres to diversify your reading experience",
    "Look for award-winning books in your favorite genres",
    "Try authors you haven't read before within your preferred categories",
    "Balance fiction and non-fiction for a well-rounded library",
]
AI_DEFAULT_RECOMMENDATIONS = [
    "Explore new genres",
    "Try award-winning authors",
    "Balance fiction and non-fiction",
]
AI_HEALTH_FACTORS = [
    "Collection demonstrates good genre diversity",
    "Reading habits show consistent engagement",
    "Library size supports varied reading experiences",
]

_GENRE_SUMMARIES = {
    "Fiction": (
        "A compelling work of fiction that explores the human condition through "
        "{author}'s masterful storytelling."
    ),
    "Science Fiction": (
        "An imaginative science fiction tale that pushes the boundaries of what's "
        "possible in {author}'s visionary world."
    ),
    "Fantasy": (
        "A magical fantasy adventure filled with wonder and excitement, brought to life "
        "by {author}'s rich imagination."
    ),
    "Mystery": (
        "A gripping mystery that will keep you guessing until the very end, showcasing "
        "{author}'s talent for suspense."
    ),
    "Romance": (
        "A heartwarming romance that explores the complexities of love and relationships "
        "through {author}'s engaging narrative."
    ),
    "Thriller": (
        "A pulse-pounding thriller that delivers non-stop excitement and unexpected "
        "twists from {author}."
    ),
    "Biography": (
        "An insightful biography that provides a compelling look into a remarkable life, "
        "written by {author}."
    ),
    "History": (
        "A fascinating exploration of historical events and their impact, presented "
        "through {author}'s expert analysis."
    ),
    "Classic Literature": (
        "A timeless classic that continues to resonate with readers, demonstrating "
        "{author}'s enduring literary genius."
    ),
}

_NUMBERED = re.compile(r"^\d+\.\s*")
_FIRST_NUMBER = re.compile(r"(\d+)")


@dataclass
class LibraryHealth:
    score: int
    factors: list[str] = field(default_factory=list)


@dataclass
class LibraryInsights:
    """Narrative view of a collection. Same shape whichever path produced it."""

    top_genres: list[GenreCount]
    reading_trends: str
    recommendations: list[str]
    library_health: LibraryHealth
    generated: bool = False


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def fallback_summary(book: Book) -> str:
    """A canned one-line summary for book's genre."""
    template = _GENRE_SUMMARIES.get(book.genre)
    if template is not None:
        return template.format(author=book.author)
    return (
        f"A captivating {book.genre.lower()} work by {book.author} that offers readers "
        "an engaging and memorable experience."
    )


def rule_based_insights(books: Sequence[Book], top_genres: list[GenreCount]) -> LibraryInsights:
    """Deterministic insights from genre counts and availability."""
    total = len(books)
    available = sum(1 for book in books if book.is_available)
    borrowed = total - available

    if top_genres:
        first = top_genres[0]
        trends = (
            f"Your library shows a strong preference for {first.genre} "
            f"({first.percentage}% of collection)"
        )
        if len(top_genres) > 1:
            second = top_genres[1]
            trends += f" and {second.genre} ({second.percentage}%)"
        trends += ". This suggests you enjoy diverse storytelling across multiple genres."
    else:
        trends = (
            "Your library collection is just getting started! Consider exploring different "
            "genres to discover your preferences."
        )

    available_ratio = available / total if total else 0.0
    raw_score = min(10.0, max(1.0, 5 + available_ratio * 2 + len(top_genres) * 0.5))
    factors = [
        f"{percent(available, total)}% of books are available for reading",
        f"Collection spans {len(top_genres)} different genres",
        "Good collection size for variety" if total > 20 else "Consider expanding your collection",
        (
            "Active borrowing shows engagement"
            if borrowed > 0
            else "Consider checking out some books"
        ),
    ]
    return LibraryInsights(
        top_genres=top_genres,
        reading_trends=trends,
        recommendations=RULE_RECOMMENDATIONS[:3],
        library_health=LibraryHealth(score=_round_half_up(raw_score), factors=factors),
    )


def parse_ai_insights(reply: str, top_genres: list[GenreCount]) -> LibraryInsights:
    """Pull trends, recommendations and a score out of a free-text reply.

    Lines mentioning "trend" or "pattern" become the trends text (last one
    wins). Numbered lines and lines mentioning "recommend" become
    recommendations. The first number on a line mentioning "score" becomes
    the health score, clamped to 1..10.
    """
    trends = ""
    recommendations: list[str] = []
    score = DEFAULT_AI_SCORE

    for line in (raw for raw in reply.splitlines() if raw.strip()):
        lowered = line.lower()
        if "trend" in lowered or "pattern" in lowered:
            trends = line
        elif "recommend" in lowered or _NUMBERED.match(line):
            recommendations.append(_NUMBERED.sub("", line, count=1))
        elif "score" in lowered:
            match = _FIRST_NUMBER.search(line)
            if match:
                score = int(match.group(1))

    if not trends:
        leading = top_genres[0].genre if top_genres else "various genres"
        trends = f"Your collection shows strong preferences for {leading}."
    if not recommendations:
        recommendations = list(AI_DEFAULT_RECOMMENDATIONS)

    return LibraryInsights(
        top_genres=top_genres,
        reading_trends=trends,
        recommendations=recommendations[:4],
        library_health=LibraryHealth(
            score=max(1, min(10, score)), factors=list(AI_HEALTH_FACTORS)
        ),
        generated=True,
    )


def _insights_prompt(books: Sequence[Book], top_genres: list[GenreCount]) -> str:
    genres = ", ".join(f"{g.genre} ({g.count} books)" for g in top_genres)
    samples = ", ".join(f'"{b.title}" by {b.author}' for b in books[:SAMPLE_TITLES])
    return (
        "Analyze this library collection and provide insights:\n\n"
        f"Collection: {len(books)} books\n"
        f"Top genres: {genres}\n"
        f"Sample titles: {samples}\n\n"
        "Provide:\n"
        "1. A brief analysis of reading trends and patterns\n"
        "2. 3-4 personalized book recommendations based on this collection\n"
        "3. A library health score (1-10) with improvement suggestions\n\n"
        "Keep it concise and actionable."
    )


def _summary_prompt(book: Book) -> str:
    return (
        f'Write a compelling 2-3 sentence summary for the book "{book.title}" by '
        f"{book.author}.\nGenre: {book.genre}. Year: {book.year}.\n"
        "The summary should be engaging and give readers a sense of what makes this "
        "book special.\nFocus on the main themes, plot, or key insights without spoilers."
    )


class InsightService:
    """Produces insights and summaries, preferring the generator when one is configured."""

    def __init__(self, generator: TextGenerator | None = None) -> None:
        self._generator = generator

    @property
    def uses_ai(self) -> bool:
        return self._generator is not None

    def library_insights(self, books: Sequence[Book]) -> LibraryInsights:
        """Insights for a collection; never raises for generator failures."""
        top_genres = genre_histogram(books, TOP_GENRES)
        if self._generator is None:
            return rule_based_insights(books, top_genres)

        try:
            reply = self._generator.generate(
                _insights_prompt(books, top_genres), temperature=0.6, max_output_tokens=400
            )
        except GenerationError as exc:
            logger.warning("Insight generation failed, using rule-based insights: %s", exc)
            return rule_based_insights(books, top_genres)

        if not reply or not reply.strip():
            logger.warning("Insight generation returned nothing, using rule-based insights")
            return rule_based_insights(books, top_genres)
        return parse_ai_insights(reply, top_genres)

    def book_summary(self, book: Book) -> str:
        """A short summary of book, generated if possible, canned otherwise."""
        if self._generator is None:
            return fallback_summary(book)
        try:
            reply = self._generator.generate(
                _summary_prompt(book), temperature=0.7, max_output_tokens=200
            )
        except GenerationError as exc:
            logger.warning("Summary generation failed for %s: %s", book.id, exc)
            return fallback_summary(book)
        if not reply or not reply.strip():
            return fallback_summary(book)
        return reply.strip()
