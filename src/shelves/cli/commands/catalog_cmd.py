# ABOUTME: The `shelves catalog` command group for the Open Library catalog.
# ABOUTME: search previews results; sync replaces a collection with fetched books.

import random
from pathlib import Path

import click
from rich.console import Console

from shelves.catalog.http import CatalogHttpClient
from shelves.catalog.openlibrary import OpenLibraryCatalog
from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import books_table
from shelves.cli.session import open_session, reported_errors
from shelves.config import Settings

console = Console()


def _catalog(seed: int | None) -> OpenLibraryCatalog:
    settings = Settings.from_env()
    rng = random.Random(seed) if seed is not None else None
    return OpenLibraryCatalog(CatalogHttpClient(timeout=settings.http_timeout), rng)


@click.group("catalog")
def catalog() -> None:
    """Browse and import books from Open Library."""


@catalog.command("search")
@click.argument("query")
@click.option("--limit", type=int, default=30, show_default=True)
@click.option("--seed", type=int, default=None, help="Seed for simulated availability.")
def catalog_search(query: str, limit: int, seed: int | None) -> None:
    """Search Open Library without saving anything."""
    with reported_errors(console):
        books = _catalog(seed).search(query, limit)
    console.print(books_table(books))
    console.print(f"\n[dim]{len(books)} result(s)[/dim]")


@catalog.command("sync")
@click.option(
    "--source",
    type=click.Choice(["popular", "trending"]),
    default="popular",
    show_default=True,
    help="Which Open Library list to import.",
)
@click.option("--seed", type=int, default=None, help="Seed for simulated availability.")
@store_option
@user_option
@workspace_option
def catalog_sync(
    source: str,
    seed: int | None,
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
) -> None:
    """Replace the collection with books fetched from Open Library."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        client = _catalog(seed)
        books = client.trending_books() if source == "trending" else client.fetch_popular_books()
        session.replace_all(books)

    console.print(f"Imported [bold]{len(books)}[/bold] books into {session.scope}.")
