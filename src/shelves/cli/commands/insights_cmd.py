# ABOUTME: The `shelves stats`, `insights`, `recommend`, and `summary` commands.
# ABOUTME: Derived views over a collection, AI-assisted when a Gemini API key is configured.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelves.catalog.http import CatalogHttpClient
from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import books_table, borrowings_table
from shelves.cli.session import Session, open_session, reported_errors
from shelves.config import Settings
from shelves.insights.gemini import GeminiClient, resolve_api_key
from shelves.insights.narrative import InsightService
from shelves.insights.recommendations import recommend_books
from shelves.insights.stats import compute_stats

console = Console()


def _insight_service(session: Session) -> InsightService:
    settings = Settings.from_env()
    api_key = resolve_api_key(settings, session.store)
    if not api_key:
        return InsightService()
    client = CatalogHttpClient(timeout=settings.http_timeout)
    return InsightService(GeminiClient(api_key, client))


@click.command("stats")
@store_option
@user_option
@workspace_option
def stats(store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """Show collection statistics."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        result = compute_stats(session.list_books(), session.borrowings())

    console.print(f"[bold]Total:[/bold] {result.total_books}")
    console.print(f"[bold]Available:[/bold] {result.available_books}")
    console.print(f"[bold]Borrowed:[/bold] {result.borrowed_books}")

    if result.popular_genres:
        table = Table(title="Popular genres")
        table.add_column("Genre", style="bold")
        table.add_column("Books", justify="right")
        table.add_column("%", justify="right")
        for entry in result.popular_genres:
            table.add_row(entry.genre, str(entry.count), f"{entry.percentage}%")
        console.print(table)

    if result.recent_borrowings:
        console.print("\n[bold]Recent borrowings[/bold]")
        console.print(borrowings_table(result.recent_borrowings))


@click.command("insights")
@store_option
@user_option
@workspace_option
def insights(store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """Describe reading trends and the health of the collection."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        books = session.list_books()
        service = _insight_service(session)
        result = service.library_insights(books)

    source = "AI" if result.generated else "rule-based"
    console.print(f"[bold]Reading trends[/bold] [dim]({source})[/dim]")
    console.print(result.reading_trends)
    console.print("\n[bold]Recommendations[/bold]")
    for line in result.recommendations:
        console.print(f"  - {line}")
    health = result.library_health
    console.print(f"\n[bold]Library health:[/bold] {health.score}/10")
    for factor in health.factors:
        console.print(f"  - {factor}")


@click.command("recommend")
@click.option("--book", "book_id", default=None, help="Recommend books like this one.")
@click.option("--genre", default=None, help="Recommend books in this genre.")
@click.option("--limit", type=int, default=5, show_default=True)
@store_option
@user_option
@workspace_option
def recommend(
    book_id: str | None,
    genre: str | None,
    limit: int,
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
) -> None:
    """Suggest books that are not in the collection yet."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        books = session.list_books()
        target = None
        if book_id is not None:
            target = next((book for book in books if book.id == book_id), None)
            if target is None:
                console.print(f"[red]Book {book_id} not found.[/red]")
                raise SystemExit(1)

    picks = recommend_books(books, target_book=target, genre=genre, limit=limit)
    if not picks:
        console.print("[yellow]You already have everything we would recommend.[/yellow]")
        return
    console.print(books_table(picks))


@click.command("summary")
@click.argument("book_id")
@store_option
@user_option
@workspace_option
def summary(book_id: str, store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """Write a short summary of a book."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        book = session.get(book_id)
        if book is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        text = _insight_service(session).book_summary(book)

    console.print(f"[bold]{book.title}[/bold] by {book.author}")
    console.print(text)
