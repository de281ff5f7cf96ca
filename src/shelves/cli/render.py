# ABOUTME: Rich table builders shared by the Shelves CLI commands.
# ABOUTME: Book lists, single-book details, and borrowing records.

from collections.abc import Sequence

from rich.table import Table

from shelves.library.types import Book, BorrowingRecord


def _status(book: Book) -> str:
    if book.is_available:
        return "[green]available[/green]"
    return f"[yellow]out to {book.borrower}[/yellow]"


def books_table(books: Sequence[Book], *, favorites: set[str] | None = None) -> Table:
    """A table row per book. Books whose id is in favorites get a star."""
    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Genre")
    table.add_column("Year", justify="right")
    table.add_column("Status")

    for book in books:
        title = book.title
        if favorites and book.id in favorites:
            title = f"[magenta]*[/magenta] {title}"
        table.add_row(
            book.id,
            title,
            book.author or "[dim]unknown[/dim]",
            book.genre,
            str(book.year),
            _status(book),
        )
    return table


def book_detail(book: Book) -> Table:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", book.id)
    table.add_row("Title", book.title)
    table.add_row("Author", book.author or "unknown")
    table.add_row("Genre", book.genre)
    table.add_row("Year", str(book.year))
    if book.isbn:
        table.add_row("ISBN", book.isbn)
    if book.tags:
        table.add_row("Tags", ", ".join(book.tags))
    if book.summary:
        table.add_row("Summary", book.summary)
    if book.cover_url:
        table.add_row("Cover", book.cover_url)
    table.add_row("Status", _status(book))
    if not book.is_available:
        table.add_row("Due", book.due_date or "?")
        table.add_row("Borrowed", book.borrowed_date or "?")
    if book.version is not None:
        table.add_row("Version", str(book.version))
    if book.last_modified_by:
        table.add_row("Modified by", f"{book.last_modified_by} at {book.last_modified}")
    return table


def borrowings_table(records: Sequence[BorrowingRecord]) -> Table:
    table = Table()
    table.add_column("Book", style="dim")
    table.add_column("Borrower")
    table.add_column("Borrowed")
    table.add_column("Due")
    table.add_column("Returned")
    for record in records:
        table.add_row(
            record.book_id,
            record.borrower,
            record.borrowed_date[:10],
            record.due_date,
            record.returned_date[:10] if record.returned_date else "[yellow]open[/yellow]",
        )
    return table
