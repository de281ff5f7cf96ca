# ABOUTME: Converts between library dataclasses and their stored JSON objects.
# ABOUTME: Stored objects use camelCase keys and omit optional fields that are unset.

from typing import Any

from shelves.library.types import Book, BorrowingRecord, UserFavorite


def _drop_none(row: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None, so absent fields stay absent on disk."""
    return {key: value for key, value in row.items() if value is not None}


def book_to_dict(book: Book) -> dict[str, Any]:
    """Convert a Book to its stored JSON object."""
    return _drop_none(
        {
            "id": book.id,
            "title": book.title,
            "author": book.author,
            "genre": book.genre,
            "year": book.year,
            "isbn": book.isbn,
            "tags": list(book.tags),
            "summary": book.summary,
            "coverUrl": book.cover_url,
            "isAvailable": book.is_available,
            "borrower": book.borrower,
            "dueDate": book.due_date,
            "borrowedDate": book.borrowed_date,
            "workspaceId": book.workspace_id,
            "createdBy": book.created_by,
            "lastModifiedBy": book.last_modified_by,
            "lastModified": book.last_modified,
            "version": book.version,
        }
    )


def book_from_dict(data: dict[str, Any]) -> Book:
    """Convert a stored JSON object back to a Book.

    Tolerates missing fields: text fields default to empty strings, year to 0,
    and availability to True.
    """
    year = data.get("year")
    version = data.get("version")
    return Book(
        id=str(data.get("id", "")),
        title=data.get("title") or "",
        author=data.get("author") or "",
        genre=data.get("genre") or "",
        year=int(year) if year is not None else 0,
        isbn=str(data.get("isbn") or ""),
        tags=list(data.get("tags") or []),
        summary=data.get("summary"),
        cover_url=data.get("coverUrl"),
        is_available=bool(data.get("isAvailable", True)),
        borrower=data.get("borrower"),
        due_date=data.get("dueDate"),
        borrowed_date=data.get("borrowedDate"),
        workspace_id=data.get("workspaceId"),
        created_by=data.get("createdBy"),
        last_modified_by=data.get("lastModifiedBy"),
        last_modified=data.get("lastModified"),
        version=int(version) if version is not None else None,
    )


def borrowing_to_dict(record: BorrowingRecord) -> dict[str, Any]:
    """Convert a BorrowingRecord to its stored JSON object."""
    return _drop_none(
        {
            "id": record.id,
            "bookId": record.book_id,
            "borrower": record.borrower,
            "borrowedDate": record.borrowed_date,
            "dueDate": record.due_date,
            "returnedDate": record.returned_date,
            "workspaceId": record.workspace_id,
        }
    )


def borrowing_from_dict(data: dict[str, Any]) -> BorrowingRecord:
    """Convert a stored JSON object back to a BorrowingRecord."""
    return BorrowingRecord(
        id=str(data.get("id", "")),
        book_id=str(data.get("bookId", "")),
        borrower=data.get("borrower") or "",
        borrowed_date=data.get("borrowedDate") or "",
        due_date=data.get("dueDate") or "",
        returned_date=data.get("returnedDate"),
        workspace_id=data.get("workspaceId"),
    )


def favorite_to_dict(favorite: UserFavorite) -> dict[str, Any]:
    """Convert a UserFavorite to its stored JSON object."""
    return {
        "id": favorite.id,
        "userId": favorite.user_id,
        "bookId": favorite.book_id,
        "dateAdded": favorite.date_added,
    }


def favorite_from_dict(data: dict[str, Any]) -> UserFavorite:
    """Convert a stored JSON object back to a UserFavorite."""
    return UserFavorite(
        id=str(data.get("id", "")),
        user_id=str(data.get("userId", "")),
        book_id=str(data.get("bookId", "")),
        date_added=data.get("dateAdded") or "",
    )
