# ABOUTME: Shared pytest fixtures for Shelves tests.
# ABOUTME: In-memory stores, a controllable clock, and a workspace with one member per role.

from pathlib import Path

import pytest

from shelves.library.books import BookStore
from shelves.library.favorites import FavoritesStore
from shelves.storage.port import MemoryStore
from shelves.workspace.library import WorkspaceLibrary
from shelves.workspace.manager import WorkspaceManager
from shelves.workspace.membership import MembershipService
from shelves.workspace.roles import WorkspaceRole
from shelves.workspace.types import WorkspaceMember
from tests.fixtures.clock import FakeClock
from tests.fixtures.workspaces import TeamWorkspace


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def books(store: MemoryStore, clock: FakeClock) -> BookStore:
    return BookStore(store, clock=clock)


@pytest.fixture
def favorites(store: MemoryStore, clock: FakeClock) -> FavoritesStore:
    return FavoritesStore(store, clock=clock)


@pytest.fixture
def manager(store: MemoryStore, clock: FakeClock) -> WorkspaceManager:
    return WorkspaceManager(store, clock=clock)


@pytest.fixture
def membership(manager: WorkspaceManager) -> MembershipService:
    return MembershipService(manager)


@pytest.fixture
def workspace_library(manager: WorkspaceManager, books: BookStore) -> WorkspaceLibrary:
    return WorkspaceLibrary(manager, books)


@pytest.fixture
def team(manager: WorkspaceManager, membership: MembershipService) -> TeamWorkspace:
    """A workspace with an owner plus an admin, librarian, member and viewer."""
    workspace = membership.create_workspace("olive", "Team Shelf", "Shared books")
    team = TeamWorkspace(workspace=workspace)
    for user_id, role in (
        (team.admin, WorkspaceRole.ADMIN),
        (team.librarian, WorkspaceRole.LIBRARIAN),
        (team.member, WorkspaceRole.MEMBER),
        (team.viewer, WorkspaceRole.VIEWER),
    ):
        manager.add_member(
            WorkspaceMember(
                user_id=user_id,
                workspace_id=workspace.id,
                role=role,
                joined_at=manager.now(),
                invited_by=team.owner,
            )
        )
    return team


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Path for a fresh SQLite store file."""
    return tmp_path / "shelves.db"
