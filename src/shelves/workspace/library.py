# ABOUTME: WorkspaceLibrary: a workspace's book collection as seen by one of its members.
# ABOUTME: Resolves the caller's role, drives BookStore in the workspace scope, and logs activity.

from datetime import timedelta
from typing import Any

from shelves.library.books import ALL_GENRES, BookStore, Scope
from shelves.library.types import Book, BookInput, BookPatch
from shelves.workspace.manager import WorkspaceManager
from shelves.workspace.roles import Actor, Capability, PermissionDeniedError, require
from shelves.workspace.types import ActivityAction, ActivityResource


class WorkspaceLibrary:
    """Book operations inside a workspace on behalf of a user.

    Permission checks happen in BookStore; this layer supplies the actor,
    enforces the workspace's borrowing settings, and records activity.
    """

    def __init__(self, manager: WorkspaceManager, books: BookStore) -> None:
        self._manager = manager
        self._books = books

    def actor(self, workspace_id: str, user_id: str) -> Actor:
        return Actor(user_id=user_id, role=self._manager.role_of(workspace_id, user_id))

    def list_books(self, workspace_id: str, user_id: str) -> list[Book]:
        """All books in the workspace.

        Raises:
            PermissionDeniedError: If the user cannot view books here.
        """
        require(self.actor(workspace_id, user_id), Capability.VIEW_BOOKS, "view books")
        return self._books.list_all(Scope(workspace_id))

    def search(
        self, workspace_id: str, user_id: str, query: str = "", genre: str | None = ALL_GENRES
    ) -> list[Book]:
        require(self.actor(workspace_id, user_id), Capability.VIEW_BOOKS, "search books")
        return self._books.search(Scope(workspace_id), query, genre)

    def add_book(self, workspace_id: str, user_id: str, data: BookInput) -> Book:
        book = self._books.add(Scope(workspace_id), data, self.actor(workspace_id, user_id))
        self._log(workspace_id, user_id, ActivityAction.CREATED, book, {"title": book.title})
        return book

    def update_book(
        self, workspace_id: str, user_id: str, book_id: str, patch: BookPatch
    ) -> Book | None:
        book = self._books.update(
            Scope(workspace_id), book_id, patch, self.actor(workspace_id, user_id)
        )
        if book is not None:
            self._log(
                workspace_id,
                user_id,
                ActivityAction.UPDATED,
                book,
                {"title": book.title, "version": book.version},
            )
        return book

    def delete_book(self, workspace_id: str, user_id: str, book_id: str) -> bool:
        scope = Scope(workspace_id)
        actor = self.actor(workspace_id, user_id)
        existing = self._books.get(scope, book_id)
        deleted = self._books.delete(scope, book_id, actor)
        if deleted and existing is not None:
            self._log(
                workspace_id, user_id, ActivityAction.DELETED, existing, {"title": existing.title}
            )
        return deleted

    def check_out(
        self,
        workspace_id: str,
        user_id: str,
        book_id: str,
        borrower: str,
        due_date: str | None = None,
    ) -> bool:
        """Check a book out, defaulting the due date to the workspace's loan period.

        Returns:
            False if the workspace or book does not exist.

        Raises:
            PermissionDeniedError: If borrowing is disabled or the user cannot borrow.
        """
        workspace = self._manager.get_workspace(workspace_id)
        if workspace is None:
            return False
        if not workspace.settings.borrowing_enabled:
            raise PermissionDeniedError(f"Borrowing is disabled in {workspace.name}")

        due = due_date or (
            self._manager.today() + timedelta(days=workspace.settings.max_borrow_duration)
        ).isoformat()
        scope = Scope(workspace_id)
        actor = self.actor(workspace_id, user_id)
        if not self._books.check_out(scope, book_id, borrower, due, actor):
            return False
        book = self._books.get(scope, book_id)
        if book is not None:
            self._log(
                workspace_id,
                user_id,
                ActivityAction.BORROWED,
                book,
                {"title": book.title, "borrower": borrower, "dueDate": due},
            )
        return True

    def check_in(self, workspace_id: str, user_id: str, book_id: str) -> bool:
        scope = Scope(workspace_id)
        if not self._books.check_in(scope, book_id, self.actor(workspace_id, user_id)):
            return False
        book = self._books.get(scope, book_id)
        if book is not None:
            self._log(workspace_id, user_id, ActivityAction.RETURNED, book, {"title": book.title})
        return True

    def _log(
        self,
        workspace_id: str,
        user_id: str,
        action: ActivityAction,
        book: Book,
        details: dict[str, Any],
    ) -> None:
        self._manager.record_activity(
            workspace_id, user_id, action, ActivityResource.BOOK, book.id, details=details
        )
