# ABOUTME: BookStore: CRUD, check-out/check-in, and search over a persisted book collection.
# ABOUTME: Each operation reads the full collection, mutates it in memory, and writes it back.

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date

from shelves.clock import Clock, iso_timestamp, utc_now
from shelves.library.mapping import (
    book_from_dict,
    book_to_dict,
    borrowing_from_dict,
    borrowing_to_dict,
)
from shelves.library.seed import seed_books
from shelves.library.types import Book, BookInput, BookPatch, BorrowingRecord
from shelves.storage.collection import JsonCollection
from shelves.storage.keys import BOOKS_KEY, BORROWINGS_KEY, scoped_key
from shelves.storage.port import KeyValueStore
from shelves.workspace.roles import Actor, Capability, require

logger = logging.getLogger(__name__)

ALL_GENRES = "all"


@dataclass(frozen=True)
class Scope:
    """Where a book collection lives: the global library or one workspace."""

    workspace_id: str | None = None

    @property
    def is_workspace(self) -> bool:
        return self.workspace_id is not None

    def __str__(self) -> str:
        return f"workspace {self.workspace_id}" if self.workspace_id else "global library"


GLOBAL_SCOPE = Scope()


def _random_suffix() -> str:
    return uuid.uuid4().hex[:12]


class BookStore:
    """Book and borrowing-record collections for any scope.

    In a workspace scope, books carry workspace_id, authorship stamps and a
    version counter, and every mutation is checked against the actor's role.
    The global scope is unversioned and unchecked.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = _random_suffix,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    # --- Collections ---

    def _books(self, scope: Scope) -> JsonCollection[Book]:
        return JsonCollection(
            self._store, scoped_key(BOOKS_KEY, scope.workspace_id), book_from_dict, book_to_dict
        )

    def _borrowings(self, scope: Scope) -> JsonCollection[BorrowingRecord]:
        return JsonCollection(
            self._store,
            scoped_key(BORROWINGS_KEY, scope.workspace_id),
            borrowing_from_dict,
            borrowing_to_dict,
        )

    def _new_id(self, scope: Scope, kind: str) -> str:
        suffix = f"{kind}-{self._id_factory()}"
        return f"{scope.workspace_id}-{suffix}" if scope.is_workspace else suffix

    def _now(self) -> str:
        return iso_timestamp(self._clock())

    def _stamp(self, scope: Scope, book: Book, actor: Actor | None) -> None:
        """Bump version and modification stamps on a workspace book. MUTATES book."""
        if not scope.is_workspace:
            return
        book.version = (book.version or 0) + 1
        book.last_modified = self._now()
        if actor is not None:
            book.last_modified_by = actor.user_id

    # --- Reads ---

    def list_all(self, scope: Scope = GLOBAL_SCOPE) -> list[Book]:
        """Return every book in scope, seeding the collection on first access."""
        collection = self._books(scope)
        books = collection.load()
        if books is not None:
            return books

        books = seed_books()
        if scope.is_workspace:
            for book in books:
                book.id = f"{scope.workspace_id}-{book.id}"
                book.workspace_id = scope.workspace_id
                book.version = 1
        collection.save(books)
        logger.info("Seeded %d books into %s", len(books), scope)
        return books

    def get(self, scope: Scope, book_id: str) -> Book | None:
        """Retrieve a book by id, or None."""
        return next((book for book in self.list_all(scope) if book.id == book_id), None)

    def search(self, scope: Scope, query: str = "", genre: str | None = ALL_GENRES) -> list[Book]:
        """Filter books by a text query and a genre.

        The query is a case-insensitive substring match against title, author,
        or any tag; an empty query matches everything. The genre must match
        exactly unless it is empty or "all". Collection order is preserved.
        """
        needle = query.lower()

        def matches(book: Book) -> bool:
            matches_query = (
                query == ""
                or needle in book.title.lower()
                or needle in book.author.lower()
                or any(needle in tag.lower() for tag in book.tags)
            )
            matches_genre = not genre or genre == ALL_GENRES or book.genre == genre
            return matches_query and matches_genre

        return [book for book in self.list_all(scope) if matches(book)]

    def genres(self, scope: Scope = GLOBAL_SCOPE) -> list[str]:
        """Distinct genres in scope, alphabetically sorted."""
        return sorted({book.genre for book in self.list_all(scope) if book.genre})

    def overdue(self, scope: Scope = GLOBAL_SCOPE, today: date | None = None) -> list[Book]:
        """Books that are checked out past their due date."""
        day = today or self._clock().date()
        return [book for book in self.list_all(scope) if book.is_overdue(day)]

    def borrowing_records(self, scope: Scope = GLOBAL_SCOPE) -> list[BorrowingRecord]:
        """Every borrowing record in scope, in insertion order."""
        return self._borrowings(scope).load_or_empty()

    def active_borrowings(self, scope: Scope = GLOBAL_SCOPE) -> list[BorrowingRecord]:
        """Borrowing records that have not been returned."""
        return [record for record in self.borrowing_records(scope) if record.is_active]

    # --- Mutations ---

    def add(self, scope: Scope, data: BookInput, actor: Actor | None = None) -> Book:
        """Add a book to scope. New books are always available.

        Raises:
            PermissionDeniedError: In a workspace scope, if actor cannot manage books.
        """
        if scope.is_workspace:
            require(actor, Capability.MANAGE_BOOKS, "add books")

        book = Book(
            id=self._new_id(scope, "book"),
            title=data.title,
            author=data.author,
            genre=data.genre,
            year=data.year,
            isbn=data.isbn,
            tags=list(data.tags),
            summary=data.summary,
            is_available=True,
        )
        if scope.is_workspace and actor is not None:
            book.workspace_id = scope.workspace_id
            book.created_by = actor.user_id
            book.last_modified_by = actor.user_id
            book.last_modified = self._now()
            book.version = 1

        books = self.list_all(scope)
        books.append(book)
        self._books(scope).save(books)
        return book

    def update(
        self, scope: Scope, book_id: str, patch: BookPatch, actor: Actor | None = None
    ) -> Book | None:
        """Apply patch to a book.

        Returns:
            The updated book, or None if book_id does not exist in scope.

        Raises:
            PermissionDeniedError: In a workspace scope, if actor cannot manage books.
        """
        if scope.is_workspace:
            require(actor, Capability.MANAGE_BOOKS, "edit books")
        return self._modify(scope, book_id, actor, patch.apply)

    def delete(self, scope: Scope, book_id: str, actor: Actor | None = None) -> bool:
        """Remove a book. Borrowing records and favorites that reference it are kept.

        Raises:
            PermissionDeniedError: In a workspace scope, if actor cannot manage books.
        """
        if scope.is_workspace:
            require(actor, Capability.MANAGE_BOOKS, "delete books")
        books = self.list_all(scope)
        remaining = [book for book in books if book.id != book_id]
        if len(remaining) == len(books):
            return False
        self._books(scope).save(remaining)
        return True

    def replace_all(self, scope: Scope, books: Iterable[Book], actor: Actor | None = None) -> None:
        """Overwrite the whole collection, e.g. with a freshly fetched catalog.

        Raises:
            PermissionDeniedError: In a workspace scope, if actor cannot manage books.
        """
        items = list(books)
        if scope.is_workspace:
            require(actor, Capability.MANAGE_BOOKS, "replace the catalog")
            for book in items:
                book.workspace_id = scope.workspace_id
                if book.version is None:
                    book.version = 1
        self._books(scope).save(items)

    def check_out(
        self,
        scope: Scope,
        book_id: str,
        borrower: str,
        due_date: str,
        actor: Actor | None = None,
    ) -> bool:
        """Mark a book borrowed and open a borrowing record.

        The current availability is not checked: checking out a borrowed book
        overwrites its borrower and due date and opens a second record.

        Returns:
            False if book_id does not exist in scope.

        Raises:
            PermissionDeniedError: In a workspace scope, if actor cannot borrow books.
        """
        if scope.is_workspace:
            require(actor, Capability.BORROW_BOOKS, "check out books")
        now = self._now()

        def borrow(book: Book) -> None:
            book.is_available = False
            book.borrower = borrower
            book.due_date = due_date
            book.borrowed_date = now

        if self._modify(scope, book_id, actor, borrow) is None:
            return False

        collection = self._borrowings(scope)
        records = collection.load_or_empty()
        records.append(
            BorrowingRecord(
                id=self._new_id(scope, "loan"),
                book_id=book_id,
                borrower=borrower,
                borrowed_date=now,
                due_date=due_date,
                workspace_id=scope.workspace_id,
            )
        )
        collection.save(records)
        return True

    def check_in(self, scope: Scope, book_id: str, actor: Actor | None = None) -> bool:
        """Return a book and close its first open borrowing record.

        Returns:
            False if book_id does not exist in scope.

        Raises:
            PermissionDeniedError: In a workspace scope, if actor cannot borrow books.
        """
        if scope.is_workspace:
            require(actor, Capability.BORROW_BOOKS, "check in books")

        def give_back(book: Book) -> None:
            book.is_available = True
            book.borrower = None
            book.due_date = None
            book.borrowed_date = None

        if self._modify(scope, book_id, actor, give_back) is None:
            return False

        collection = self._borrowings(scope)
        records = collection.load_or_empty()
        active = next((r for r in records if r.book_id == book_id and r.is_active), None)
        if active is not None:
            active.returned_date = self._now()
            collection.save(records)
        return True

    def _modify(
        self,
        scope: Scope,
        book_id: str,
        actor: Actor | None,
        change: Callable[[Book], None],
    ) -> Book | None:
        """Load, change one book in place, stamp it, and save the collection."""
        books = self.list_all(scope)
        book = next((b for b in books if b.id == book_id), None)
        if book is None:
            return None
        change(book)
        self._stamp(scope, book, actor)
        self._books(scope).save(books)
        return book
