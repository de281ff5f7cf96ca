# ABOUTME: Public API for Shelves workspaces: tenants, membership, roles, and activity.
# ABOUTME: WorkspaceLibrary lives in shelves.workspace.library to keep imports one-directional.

from shelves.workspace.manager import WorkspaceManager
from shelves.workspace.membership import MembershipService
from shelves.workspace.roles import (
    ROLE_CAPABILITIES,
    ROLE_ORDER,
    Actor,
    Capability,
    PermissionDeniedError,
    WorkspaceRole,
    can_borrow_books,
    can_invite_members,
    can_manage_books,
    can_manage_members,
    can_manage_settings,
    can_view_books,
    parse_role,
)
from shelves.workspace.types import (
    ActivityAction,
    ActivityResource,
    InvitationStatus,
    MemberPatch,
    Workspace,
    WorkspaceActivity,
    WorkspaceInvitation,
    WorkspaceMember,
    WorkspacePatch,
    WorkspaceSettings,
)

__all__ = [
    "ROLE_CAPABILITIES",
    "ROLE_ORDER",
    "ActivityAction",
    "ActivityResource",
    "Actor",
    "Capability",
    "InvitationStatus",
    "MemberPatch",
    "MembershipService",
    "PermissionDeniedError",
    "Workspace",
    "WorkspaceActivity",
    "WorkspaceInvitation",
    "WorkspaceManager",
    "WorkspaceMember",
    "WorkspacePatch",
    "WorkspaceRole",
    "WorkspaceSettings",
    "can_borrow_books",
    "can_invite_members",
    "can_manage_books",
    "can_manage_members",
    "can_manage_settings",
    "can_view_books",
    "parse_role",
]
