# ABOUTME: Opens the store and routes book operations to the global library or a workspace.
# ABOUTME: Commands use one Session per invocation and close it on exit.

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path

from rich.console import Console

from shelves.library.books import ALL_GENRES, GLOBAL_SCOPE, BookStore, Scope
from shelves.library.favorites import FavoritesStore
from shelves.library.types import Book, BookInput, BookPatch, BorrowingRecord
from shelves.storage.port import KeyValueStore
from shelves.storage.sqlite import open_store
from shelves.workspace.library import WorkspaceLibrary
from shelves.workspace.manager import WorkspaceManager
from shelves.workspace.membership import MembershipService
from shelves.workspace.roles import PermissionDeniedError

DEFAULT_LOAN_DAYS = 14


class UnknownWorkspaceError(Exception):
    """Raised when --workspace names a workspace that does not exist."""


class Session:
    """The acting user's view of one book collection.

    With no workspace_id, calls go straight to BookStore in the global scope.
    Otherwise they go through WorkspaceLibrary, which checks the user's role
    and records activity.
    """

    def __init__(
        self, store: KeyValueStore, user_id: str, workspace_id: str | None = None
    ) -> None:
        self.store = store
        self.user_id = user_id
        self.books = BookStore(store)
        self.favorites = FavoritesStore(store)
        self.manager = WorkspaceManager(store)
        self.membership = MembershipService(self.manager)
        self.library = WorkspaceLibrary(self.manager, self.books)
        self.workspace_id = workspace_id
        if workspace_id is not None and self.manager.get_workspace(workspace_id) is None:
            raise UnknownWorkspaceError(f"Workspace {workspace_id} not found.")

    @property
    def scope(self) -> Scope:
        return Scope(self.workspace_id) if self.workspace_id else GLOBAL_SCOPE

    def list_books(self) -> list[Book]:
        if self.workspace_id:
            return self.library.list_books(self.workspace_id, self.user_id)
        return self.books.list_all()

    def search(self, query: str = "", genre: str = ALL_GENRES) -> list[Book]:
        if self.workspace_id:
            return self.library.search(self.workspace_id, self.user_id, query, genre)
        return self.books.search(GLOBAL_SCOPE, query, genre)

    def get(self, book_id: str) -> Book | None:
        return next((book for book in self.list_books() if book.id == book_id), None)

    def add(self, data: BookInput) -> Book:
        if self.workspace_id:
            return self.library.add_book(self.workspace_id, self.user_id, data)
        return self.books.add(GLOBAL_SCOPE, data)

    def update(self, book_id: str, patch: BookPatch) -> Book | None:
        if self.workspace_id:
            return self.library.update_book(self.workspace_id, self.user_id, book_id, patch)
        return self.books.update(GLOBAL_SCOPE, book_id, patch)

    def delete(self, book_id: str) -> bool:
        if self.workspace_id:
            return self.library.delete_book(self.workspace_id, self.user_id, book_id)
        return self.books.delete(GLOBAL_SCOPE, book_id)

    def check_out(self, book_id: str, borrower: str, due_date: str | None = None) -> bool:
        """Check a book out. Without due_date the loan runs the default period."""
        if self.workspace_id:
            return self.library.check_out(
                self.workspace_id, self.user_id, book_id, borrower, due_date
            )
        due = due_date or (
            self.manager.today() + timedelta(days=DEFAULT_LOAN_DAYS)
        ).isoformat()
        return self.books.check_out(GLOBAL_SCOPE, book_id, borrower, due)

    def check_in(self, book_id: str) -> bool:
        if self.workspace_id:
            return self.library.check_in(self.workspace_id, self.user_id, book_id)
        return self.books.check_in(GLOBAL_SCOPE, book_id)

    def replace_all(self, books: list[Book]) -> None:
        """Swap the whole collection for books, e.g. after a catalog sync."""
        actor = None
        if self.workspace_id:
            actor = self.library.actor(self.workspace_id, self.user_id)
        self.books.replace_all(self.scope, books, actor)

    def borrowings(self) -> list[BorrowingRecord]:
        return self.books.borrowing_records(self.scope)


@contextmanager
def open_session(
    store_path: Path | None, user_id: str, workspace_id: str | None = None
) -> Iterator[Session]:
    """Open the store at store_path and yield a Session, closing the store afterwards."""
    with open_store(store_path) as store:
        yield Session(store, user_id, workspace_id)


@contextmanager
def reported_errors(console: Console) -> Iterator[None]:
    """Print expected failures in red and exit with status 1."""
    try:
        yield
    except (UnknownWorkspaceError, PermissionDeniedError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
