# ABOUTME: Derived views over a book collection: statistics, recommendations, and insights.
# ABOUTME: Exports the aggregation functions, the Gemini client, and InsightService.

from shelves.insights.gemini import (
    GeminiClient,
    GenerationError,
    TextGenerator,
    resolve_api_key,
    save_api_key,
)
from shelves.insights.narrative import (
    InsightService,
    LibraryHealth,
    LibraryInsights,
    fallback_summary,
    parse_ai_insights,
)
from shelves.insights.recommendations import recommend_books
from shelves.insights.stats import GenreCount, LibraryStats, compute_stats, genre_histogram

__all__ = [
    "GeminiClient",
    "GenerationError",
    "GenreCount",
    "InsightService",
    "LibraryHealth",
    "LibraryInsights",
    "LibraryStats",
    "TextGenerator",
    "compute_stats",
    "fallback_summary",
    "genre_histogram",
    "parse_ai_insights",
    "recommend_books",
    "resolve_api_key",
    "save_api_key",
]
