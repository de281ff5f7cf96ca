# ABOUTME: The `shelves ls` command for listing books in a collection.
# ABOUTME: Displays a Rich table, optionally filtered by genre or availability.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import books_table
from shelves.cli.session import open_session, reported_errors
from shelves.library.books import ALL_GENRES

console = Console()


@click.command("ls")
@store_option
@user_option
@workspace_option
@click.option("--genre", default=ALL_GENRES, show_default=True, help="Only show this genre.")
@click.option(
    "--available/--borrowed",
    "available",
    default=None,
    help="Only show available or only borrowed books.",
)
def ls(
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
    genre: str,
    available: bool | None,
) -> None:
    """List the books in the library or a workspace."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        books = session.search("", genre)
        favorites = set(session.favorites.favorite_book_ids(user_id))

    if available is not None:
        books = [book for book in books if book.is_available == available]

    if not books:
        console.print("[yellow]No books found.[/yellow]")
        return

    console.print(books_table(books, favorites=favorites))
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")
