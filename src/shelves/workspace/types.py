# ABOUTME: Workspace record types: workspaces, members, activity entries, invitations.
# ABOUTME: Patch types carry explicit field-by-field updates.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shelves.workspace.roles import WorkspaceRole


class ActivityAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    BORROWED = "borrowed"
    RETURNED = "returned"
    INVITED = "invited"
    JOINED = "joined"
    LEFT = "left"


class ActivityResource(str, Enum):
    BOOK = "book"
    BORROWING = "borrowing"
    MEMBER = "member"
    WORKSPACE = "workspace"
    SETTINGS = "settings"


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


@dataclass
class WorkspaceSettings:
    allow_public_access: bool = False
    require_approval_for_joining: bool = True
    borrowing_enabled: bool = True
    max_borrow_duration: int = 14
    ai_analysis_enabled: bool = True
    collaborative_editing_enabled: bool = True
    notifications_enabled: bool = True


@dataclass
class WorkspaceMember:
    """A user's membership in a workspace. Keyed by (workspace_id, user_id)."""

    user_id: str
    workspace_id: str
    role: WorkspaceRole
    joined_at: str
    invited_by: str | None = None
    permissions: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Workspace:
    """A tenant grouping books, members and activity under one owner.

    members holds whatever list was stored on the record itself; the
    authoritative membership lives in the separate members collection.
    """

    id: str
    name: str
    owner_id: str
    created_at: str
    updated_at: str
    description: str | None = None
    members: list[WorkspaceMember] = field(default_factory=list)
    settings: WorkspaceSettings = field(default_factory=WorkspaceSettings)
    is_public: bool = False


@dataclass
class WorkspaceActivity:
    """An append-only log entry. Never edited after it is recorded."""

    id: str
    workspace_id: str
    user_id: str
    action: ActivityAction
    resource_type: ActivityResource
    resource_id: str
    timestamp: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkspaceInvitation:
    id: str
    workspace_id: str
    email: str
    role: WorkspaceRole
    invited_by: str
    invited_at: str
    expires_at: str
    status: InvitationStatus
    token: str


@dataclass
class WorkspacePatch:
    """Field-by-field edit of a workspace. None leaves a field unchanged."""

    name: str | None = None
    description: str | None = None
    settings: WorkspaceSettings | None = None
    is_public: bool | None = None

    def apply(self, workspace: Workspace) -> None:
        """Copy every set field onto workspace. MUTATES workspace."""
        if self.name is not None:
            workspace.name = self.name
        if self.description is not None:
            workspace.description = self.description
        if self.settings is not None:
            workspace.settings = self.settings
        if self.is_public is not None:
            workspace.is_public = self.is_public


@dataclass
class MemberPatch:
    role: WorkspaceRole | None = None
    permissions: list[dict[str, Any]] | None = None

    def apply(self, member: WorkspaceMember) -> None:
        """Copy every set field onto member. MUTATES member."""
        if self.role is not None:
            member.role = self.role
        if self.permissions is not None:
            member.permissions = list(self.permissions)
