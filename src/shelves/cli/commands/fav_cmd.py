# ABOUTME: The `shelves fav` command group for a user's favorite books.
# ABOUTME: Provides toggle and ls subcommands.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import books_table
from shelves.cli.session import open_session, reported_errors

console = Console()


@click.group("fav")
def fav() -> None:
    """Manage favorite books."""


@fav.command("toggle")
@click.argument("book_id")
@store_option
@user_option
@workspace_option
def fav_toggle(
    book_id: str, store_path: Path | None, user_id: str, workspace_id: str | None
) -> None:
    """Add a book to favorites, or remove it if it is already there."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        if session.get(book_id) is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        result = session.favorites.toggle(user_id, book_id)

    if result.is_favorite:
        console.print(f"Added [bold]{book_id}[/bold] to favorites.")
    else:
        console.print(f"Removed [bold]{book_id}[/bold] from favorites.")


@fav.command("ls")
@store_option
@user_option
@workspace_option
def fav_ls(store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """List your favorite books in this collection."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        wanted = set(session.favorites.favorite_book_ids(user_id))
        books = [book for book in session.list_books() if book.id in wanted]

    if not books:
        console.print("[yellow]No favorites yet.[/yellow]")
        return
    console.print(books_table(books))
    console.print(f"\n[dim]{len(books)} favorite(s)[/dim]")
