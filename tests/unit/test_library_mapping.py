# ABOUTME: Unit tests for converting library records to and from stored JSON.
# ABOUTME: Checks camelCase keys, omitted optionals, and tolerant decoding.

from shelves.library.mapping import (
    book_from_dict,
    book_to_dict,
    borrowing_from_dict,
    borrowing_to_dict,
    favorite_from_dict,
)
from shelves.library.types import Book, BorrowingRecord


class TestBookMapping:
    """Tests for Book <-> dict conversion."""

    def test_available_book_omits_loan_fields(self) -> None:
        """An available book has no borrower, dueDate, or borrowedDate keys."""
        row = book_to_dict(
            Book(id="b1", title="T", author="A", genre="G", year=1999, isbn="123")
        )
        assert row["isAvailable"] is True
        assert not {"borrower", "dueDate", "borrowedDate", "version"} & row.keys()

    def test_workspace_fields_use_camel_case(self) -> None:
        """Workspace stamps are stored under camelCase keys."""
        book = Book(
            id="w-b1",
            title="T",
            author="A",
            genre="G",
            year=1999,
            isbn="123",
            workspace_id="w",
            created_by="olive",
            last_modified_by="olive",
            last_modified="2024-08-10T09:30:00.000Z",
            version=2,
        )
        row = book_to_dict(book)
        assert row["workspaceId"] == "w"
        assert row["createdBy"] == "olive"
        assert row["lastModifiedBy"] == "olive"
        assert row["version"] == 2

    def test_cover_url_stored_as_camel_case(self) -> None:
        """A cover URL is written as coverUrl and read back; no cover means no key."""
        url = "https://covers.openlibrary.org/b/id/11481354-M.jpg"
        with_cover = Book(
            id="b1", title="T", author="A", genre="G", year=1999, isbn="1", cover_url=url
        )
        row = book_to_dict(with_cover)
        assert row["coverUrl"] == url
        assert book_from_dict(row).cover_url == url
        without = book_to_dict(Book(id="b2", title="T", author="A", genre="G", year=1, isbn="1"))
        assert "coverUrl" not in without
        assert book_from_dict(without).cover_url is None

    def test_from_dict_tolerates_missing_fields(self) -> None:
        """Missing fields decode to empty defaults and availability True."""
        book = book_from_dict({"id": "x"})
        assert book.title == ""
        assert book.year == 0
        assert book.tags == []
        assert book.is_available is True
        assert book.version is None

    def test_from_dict_reads_loan(self) -> None:
        """A borrowed book decodes its loan triple."""
        book = book_from_dict(
            {
                "id": "2",
                "title": "T",
                "isAvailable": False,
                "borrower": "Sarah Johnson",
                "dueDate": "2024-08-15",
                "borrowedDate": "2024-08-01",
            }
        )
        assert book.is_borrowed
        assert book.borrower == "Sarah Johnson"
        assert book.due_date == "2024-08-15"


class TestBorrowingMapping:
    """Tests for BorrowingRecord <-> dict conversion."""

    def test_active_record_has_no_returned_date(self) -> None:
        """An open loan omits returnedDate."""
        row = borrowing_to_dict(
            BorrowingRecord(
                id="loan-1",
                book_id="b1",
                borrower="mia",
                borrowed_date="2024-08-10T09:30:00.000Z",
                due_date="2024-08-24",
            )
        )
        assert row["bookId"] == "b1"
        assert "returnedDate" not in row

    def test_from_dict_closed_record(self) -> None:
        """returnedDate marks a record inactive."""
        record = borrowing_from_dict(
            {"id": "loan-1", "bookId": "b1", "returnedDate": "2024-08-12T00:00:00.000Z"}
        )
        assert not record.is_active


class TestFavoriteMapping:
    """Tests for UserFavorite decoding."""

    def test_from_dict(self) -> None:
        """Favorites decode userId and bookId."""
        fav = favorite_from_dict(
            {"id": "fav-1", "userId": "u", "bookId": "b", "dateAdded": "2024-01-01"}
        )
        assert (fav.user_id, fav.book_id) == ("u", "b")
