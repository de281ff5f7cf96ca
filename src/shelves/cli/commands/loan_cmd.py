# ABOUTME: The `shelves checkout`, `checkin`, `overdue`, and `loans` commands.
# ABOUTME: Borrowing workflow over the global library or a workspace.

from pathlib import Path

import click
from rich.console import Console

from shelves.cli.options import store_option, user_option, workspace_option
from shelves.cli.render import books_table, borrowings_table
from shelves.cli.session import open_session, reported_errors
from shelves.clock import parse_day

console = Console()


def _validate_day(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return parse_day(value).isoformat()
    except ValueError as exc:
        raise click.BadParameter("expected a date like 2024-08-15") from exc


@click.command("checkout")
@click.argument("book_id")
@click.option("--borrower", default=None, help="Who is borrowing (default: the acting user).")
@click.option("--due", default=None, callback=_validate_day, help="Due date, YYYY-MM-DD.")
@store_option
@user_option
@workspace_option
def checkout(
    book_id: str,
    borrower: str | None,
    due: str | None,
    store_path: Path | None,
    user_id: str,
    workspace_id: str | None,
) -> None:
    """Check a book out."""
    who = borrower or user_id
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        if not session.check_out(book_id, who, due):
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        book = session.get(book_id)

    due_date = book.due_date if book is not None else due
    console.print(f"Checked out [bold]{book_id}[/bold] to {who}, due {due_date}.")


@click.command("checkin")
@click.argument("book_id")
@store_option
@user_option
@workspace_option
def checkin(book_id: str, store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """Return a borrowed book."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        returned = session.check_in(book_id)

    if not returned:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Checked in [bold]{book_id}[/bold].")


@click.command("overdue")
@store_option
@user_option
@workspace_option
def overdue(store_path: Path | None, user_id: str, workspace_id: str | None) -> None:
    """List borrowed books past their due date."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        session.list_books()  # view check in workspaces
        books = session.books.overdue(session.scope)

    if not books:
        console.print("[green]Nothing is overdue.[/green]")
        return
    console.print(books_table(books))


@click.command("loans")
@click.option("--active", is_flag=True, help="Only loans that have not been returned.")
@store_option
@user_option
@workspace_option
def loans(
    active: bool, store_path: Path | None, user_id: str, workspace_id: str | None
) -> None:
    """Show the borrowing history."""
    with reported_errors(console), open_session(store_path, user_id, workspace_id) as session:
        session.list_books()  # view check in workspaces
        records = session.borrowings()

    if active:
        records = [record for record in records if record.is_active]
    if not records:
        console.print("[yellow]No borrowing records.[/yellow]")
        return
    console.print(borrowings_table(records))
