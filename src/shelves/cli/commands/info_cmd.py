# ABOUTME: The `shelves info` command for displaying one book in detail.
# ABOUTME: Includes loan state and, for workspace books, version and last editor.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import book_detail
from shelves.cli.session import open_session, reported_errors

console = Console()


@click.command("info")
@click.argument("book_id")
@store_option
@user_option
@workspace_option
def info(book_id: str, store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """Show everything known about a book."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        book = session.get(book_id)
        favorite = session.favorites.is_favorite(user_id, book_id)

    if book is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    console.print(book_detail(book))
    if favorite:
        console.print("[magenta]In your favorites.[/magenta]")
