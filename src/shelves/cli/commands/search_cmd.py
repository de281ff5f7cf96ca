# ABOUTME: The `shelves search` command for finding books by text and genre.
# ABOUTME: Matches title, author, or tags case-insensitively.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import books_table
from shelves.cli.session import open_session, reported_errors
from shelves.library.books import ALL_GENRES

console = Console()


@click.command("search")
@click.argument("query", default="")
@store_option
@user_option
@workspace_option
@click.option("--genre", default=ALL_GENRES, show_default=True, help="Restrict to one genre.")
def search(
    query: str,
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
    genre: str,
) -> None:
    """Search books by title, author, or tag."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        books = session.search(query, genre)

    if not books:
        console.print(f"[yellow]No books matching '{query}'.[/yellow]")
        return

    console.print(books_table(books))
    console.print(f"\n[dim]{len(books)} match(es)[/dim]")
