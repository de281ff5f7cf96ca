# ABOUTME: The `shelves add`, `shelves edit`, and `shelves rm` commands.
# ABOUTME: Catalog maintenance; in a workspace these need a book-managing role.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.session import open_session, reported_errors
from shelves.library.types import BookInput, BookPatch

console = Console()


def _split_tags(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [tag.strip() for tag in value.split(",") if tag.strip()]


@click.command("add")
@click.option("--title", required=True)
@click.option("--author", required=True)
@click.option("--genre", required=True)
@click.option("--year", type=int, required=True)
@click.option("--isbn", default="")
@click.option("--tags", default=None, help="Comma-separated tags.")
@click.option("--summary", default=None)
@store_option
@user_option
@workspace_option
def add(
    title: str,
    author: str,
    genre: str,
    year: int,
    isbn: str,
    tags: str | None,
    summary: str | None,
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
) -> None:
    """Add a new book. New books start out available."""
    data = BookInput(
        title=title,
        author=author,
        genre=genre,
        year=year,
        isbn=isbn,
        tags=_split_tags(tags) or [],
        summary=summary,
    )
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        book = session.add(data)

    console.print(f"Added [bold]{book.title}[/bold] as [cyan]{book.id}[/cyan].")


@click.command("edit")
@click.argument("book_id")
@click.option("--title", default=None)
@click.option("--author", default=None)
@click.option("--genre", default=None)
@click.option("--year", type=int, default=None)
@click.option("--isbn", default=None)
@click.option("--tags", default=None, help="Comma-separated tags, replacing the current ones.")
@click.option("--summary", default=None)
@store_option
@user_option
@workspace_option
def edit(
    book_id: str,
    title: str | None,
    author: str | None,
    genre: str | None,
    year: int | None,
    isbn: str | None,
    tags: str | None,
    summary: str | None,
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
) -> None:
    """Change a book's details. Only the given fields are touched."""
    patch = BookPatch(
        title=title,
        author=author,
        genre=genre,
        year=year,
        isbn=isbn,
        tags=_split_tags(tags),
        summary=summary,
    )
    if patch.is_empty():
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        book = session.update(book_id, patch)

    if book is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Updated [bold]{book.title}[/bold].")


@click.command("rm")
@click.argument("book_id")
@store_option
@user_option
@workspace_option
def rm(book_id: str, store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """Remove a book. Its borrowing history and favorites are kept."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        removed = session.delete(book_id)

    if not removed:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Removed book {book_id}.")
