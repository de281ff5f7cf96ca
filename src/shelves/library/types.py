# ABOUTME: Core record types for the book catalog: Book, BorrowingRecord, UserFavorite.
# ABOUTME: BookInput and BookPatch are the explicit shapes for adding and editing books.

from dataclasses import dataclass, field
from datetime import date

from shelves.clock import parse_day


@dataclass
class Book:
    """A cataloged book and its availability.

    borrower, due_date and borrowed_date are set together when the book is
    checked out and cleared together when it is checked in. The workspace
    fields are only populated for books stored in a workspace scope.
    """

    id: str
    title: str
    author: str
    genre: str
    year: int
    isbn: str
    tags: list[str] = field(default_factory=list)
    summary: str | None = None
    cover_url: str | None = None
    is_available: bool = True
    borrower: str | None = None
    due_date: str | None = None
    borrowed_date: str | None = None
    workspace_id: str | None = None
    created_by: str | None = None
    last_modified_by: str | None = None
    last_modified: str | None = None
    version: int | None = None

    @property
    def is_borrowed(self) -> bool:
        return not self.is_available

    def is_overdue(self, today: date) -> bool:
        """Whether the book is checked out and its due date is before today."""
        if self.is_available or not self.due_date:
            return False
        return parse_day(self.due_date) < today


@dataclass
class BookInput:
    """Caller-supplied fields for a new book. The store assigns id and availability."""

    title: str
    author: str
    genre: str
    year: int
    isbn: str = ""
    tags: list[str] = field(default_factory=list)
    summary: str | None = None


@dataclass
class BookPatch:
    """Field-by-field edit of a book. None leaves a field unchanged."""

    title: str | None = None
    author: str | None = None
    genre: str | None = None
    year: int | None = None
    isbn: str | None = None
    tags: list[str] | None = None
    summary: str | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.title,
                self.author,
                self.genre,
                self.year,
                self.isbn,
                self.tags,
                self.summary,
            )
        )

    def apply(self, book: Book) -> None:
        """Copy every set field onto book. MUTATES book."""
        if self.title is not None:
            book.title = self.title
        if self.author is not None:
            book.author = self.author
        if self.genre is not None:
            book.genre = self.genre
        if self.year is not None:
            book.year = self.year
        if self.isbn is not None:
            book.isbn = self.isbn
        if self.tags is not None:
            book.tags = list(self.tags)
        if self.summary is not None:
            book.summary = self.summary


@dataclass
class BorrowingRecord:
    """One check-out of a book. Active until returned_date is set."""

    id: str
    book_id: str
    borrower: str
    borrowed_date: str
    due_date: str
    returned_date: str | None = None
    workspace_id: str | None = None

    @property
    def is_active(self) -> bool:
        return self.returned_date is None


@dataclass
class UserFavorite:
    """A (user, book) favorite marker."""

    id: str
    user_id: str
    book_id: str
    date_added: str
