# ABOUTME: Converts between workspace dataclasses and their stored JSON objects.
# ABOUTME: Enum fields are stored as their string values; unset optionals are omitted.

from typing import Any

from shelves.workspace.roles import WorkspaceRole
from shelves.workspace.types import (
    ActivityAction,
    ActivityResource,
    InvitationStatus,
    Workspace,
    WorkspaceActivity,
    WorkspaceInvitation,
    WorkspaceMember,
    WorkspaceSettings,
)


def settings_to_dict(settings: WorkspaceSettings) -> dict[str, Any]:
    return {
        "allowPublicAccess": settings.allow_public_access,
        "requireApprovalForJoining": settings.require_approval_for_joining,
        "borrowingEnabled": settings.borrowing_enabled,
        "maxBorrowDuration": settings.max_borrow_duration,
        "aiAnalysisEnabled": settings.ai_analysis_enabled,
        "collaborativeEditingEnabled": settings.collaborative_editing_enabled,
        "notificationsEnabled": settings.notifications_enabled,
    }


def settings_from_dict(data: dict[str, Any]) -> WorkspaceSettings:
    defaults = WorkspaceSettings()
    return WorkspaceSettings(
        allow_public_access=data.get("allowPublicAccess", defaults.allow_public_access),
        require_approval_for_joining=data.get(
            "requireApprovalForJoining", defaults.require_approval_for_joining
        ),
        borrowing_enabled=data.get("borrowingEnabled", defaults.borrowing_enabled),
        max_borrow_duration=int(data.get("maxBorrowDuration", defaults.max_borrow_duration)),
        ai_analysis_enabled=data.get("aiAnalysisEnabled", defaults.ai_analysis_enabled),
        collaborative_editing_enabled=data.get(
            "collaborativeEditingEnabled", defaults.collaborative_editing_enabled
        ),
        notifications_enabled=data.get("notificationsEnabled", defaults.notifications_enabled),
    )


def member_to_dict(member: WorkspaceMember) -> dict[str, Any]:
    row: dict[str, Any] = {
        "userId": member.user_id,
        "workspaceId": member.workspace_id,
        "role": member.role.value,
        "joinedAt": member.joined_at,
        "permissions": list(member.permissions),
    }
    if member.invited_by is not None:
        row["invitedBy"] = member.invited_by
    return row


def member_from_dict(data: dict[str, Any]) -> WorkspaceMember:
    return WorkspaceMember(
        user_id=str(data.get("userId", "")),
        workspace_id=str(data.get("workspaceId", "")),
        role=WorkspaceRole(data.get("role", WorkspaceRole.VIEWER.value)),
        joined_at=data.get("joinedAt") or "",
        invited_by=data.get("invitedBy"),
        permissions=list(data.get("permissions") or []),
    )


def workspace_to_dict(workspace: Workspace) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": workspace.id,
        "name": workspace.name,
        "ownerId": workspace.owner_id,
        "members": [member_to_dict(m) for m in workspace.members],
        "settings": settings_to_dict(workspace.settings),
        "createdAt": workspace.created_at,
        "updatedAt": workspace.updated_at,
        "isPublic": workspace.is_public,
    }
    if workspace.description is not None:
        row["description"] = workspace.description
    return row


def workspace_from_dict(data: dict[str, Any]) -> Workspace:
    return Workspace(
        id=str(data.get("id", "")),
        name=data.get("name") or "",
        owner_id=str(data.get("ownerId", "")),
        created_at=data.get("createdAt") or "",
        updated_at=data.get("updatedAt") or "",
        description=data.get("description"),
        members=[member_from_dict(m) for m in data.get("members") or []],
        settings=settings_from_dict(data.get("settings") or {}),
        is_public=bool(data.get("isPublic", False)),
    )


def activity_to_dict(activity: WorkspaceActivity) -> dict[str, Any]:
    return {
        "id": activity.id,
        "workspaceId": activity.workspace_id,
        "userId": activity.user_id,
        "action": activity.action.value,
        "resourceType": activity.resource_type.value,
        "resourceId": activity.resource_id,
        "details": dict(activity.details),
        "timestamp": activity.timestamp,
    }


def activity_from_dict(data: dict[str, Any]) -> WorkspaceActivity:
    return WorkspaceActivity(
        id=str(data.get("id", "")),
        workspace_id=str(data.get("workspaceId", "")),
        user_id=str(data.get("userId", "")),
        action=ActivityAction(data["action"]),
        resource_type=ActivityResource(data["resourceType"]),
        resource_id=str(data.get("resourceId", "")),
        timestamp=data.get("timestamp") or "",
        details=dict(data.get("details") or {}),
    )


def invitation_to_dict(invitation: WorkspaceInvitation) -> dict[str, Any]:
    return {
        "id": invitation.id,
        "workspaceId": invitation.workspace_id,
        "email": invitation.email,
        "role": invitation.role.value,
        "invitedBy": invitation.invited_by,
        "invitedAt": invitation.invited_at,
        "expiresAt": invitation.expires_at,
        "status": invitation.status.value,
        "token": invitation.token,
    }


def invitation_from_dict(data: dict[str, Any]) -> WorkspaceInvitation:
    return WorkspaceInvitation(
        id=str(data.get("id", "")),
        workspace_id=str(data.get("workspaceId", "")),
        email=data.get("email") or "",
        role=WorkspaceRole(data.get("role", WorkspaceRole.MEMBER.value)),
        invited_by=str(data.get("invitedBy", "")),
        invited_at=data.get("invitedAt") or "",
        expires_at=data.get("expiresAt") or "",
        status=InvitationStatus(data.get("status", InvitationStatus.PENDING.value)),
        token=data.get("token") or "",
    )
