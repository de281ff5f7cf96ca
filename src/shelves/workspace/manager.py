# ABOUTME: WorkspaceManager: record operations for workspaces, members, activities, invitations.
# ABOUTME: Each collection is a flat JSON array; operations are linear scan-and-replace.

import logging
import secrets
import uuid
from datetime import date, timedelta
from typing import Any

from shelves.clock import Clock, iso_timestamp, parse_timestamp, utc_now
from shelves.storage.collection import JsonCollection
from shelves.storage.keys import ACTIVITIES_KEY, INVITATIONS_KEY, MEMBERS_KEY, WORKSPACES_KEY
from shelves.storage.port import KeyValueStore
from shelves.workspace.mapping import (
    activity_from_dict,
    activity_to_dict,
    invitation_from_dict,
    invitation_to_dict,
    member_from_dict,
    member_to_dict,
    workspace_from_dict,
    workspace_to_dict,
)
from shelves.workspace.roles import WorkspaceRole
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

logger = logging.getLogger(__name__)

INVITATION_TTL = timedelta(days=7)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class WorkspaceManager:
    """Stores workspaces and everything scoped to them.

    None/False returns signal a missing record. Creating a workspace and adding
    its owner as a member are separate writes; nothing rolls the first back if
    the second never happens.
    """

    def __init__(self, store: KeyValueStore, *, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._workspaces = JsonCollection(
            store, WORKSPACES_KEY, workspace_from_dict, workspace_to_dict
        )
        self._members = JsonCollection(store, MEMBERS_KEY, member_from_dict, member_to_dict)
        self._activities = JsonCollection(
            store, ACTIVITIES_KEY, activity_from_dict, activity_to_dict
        )
        self._invitations = JsonCollection(
            store, INVITATIONS_KEY, invitation_from_dict, invitation_to_dict
        )

    def now(self) -> str:
        return iso_timestamp(self._clock())

    def today(self) -> date:
        return self._clock().date()

    # --- Workspaces ---

    def list_workspaces(self) -> list[Workspace]:
        return self._workspaces.load_or_empty()

    def get_workspace(self, workspace_id: str) -> Workspace | None:
        return next((w for w in self.list_workspaces() if w.id == workspace_id), None)

    def create_workspace(
        self,
        name: str,
        owner_id: str,
        *,
        description: str | None = None,
        settings: WorkspaceSettings | None = None,
        is_public: bool = False,
    ) -> Workspace:
        """Create a workspace record. The owner membership must be added separately."""
        now = self.now()
        workspace = Workspace(
            id=_new_id("workspace"),
            name=name,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            description=description,
            settings=settings or WorkspaceSettings(),
            is_public=is_public,
        )
        workspaces = self.list_workspaces()
        workspaces.append(workspace)
        self._workspaces.save(workspaces)
        return workspace

    def update_workspace(self, workspace_id: str, patch: WorkspacePatch) -> Workspace | None:
        """Apply patch and restamp updated_at. None if the workspace does not exist."""
        workspaces = self.list_workspaces()
        workspace = next((w for w in workspaces if w.id == workspace_id), None)
        if workspace is None:
            return None
        patch.apply(workspace)
        workspace.updated_at = self.now()
        self._workspaces.save(workspaces)
        return workspace

    def delete_workspace(self, workspace_id: str) -> bool:
        """Delete a workspace with its members, activities and invitations.

        Book and borrowing collections stored under the workspace's scope are
        left in place.
        """
        workspaces = self.list_workspaces()
        remaining = [w for w in workspaces if w.id != workspace_id]
        if len(remaining) == len(workspaces):
            return False
        self._workspaces.save(remaining)

        self._members.save(
            [m for m in self._members.load_or_empty() if m.workspace_id != workspace_id]
        )
        self._activities.save(
            [a for a in self._activities.load_or_empty() if a.workspace_id != workspace_id]
        )
        self._invitations.save(
            [i for i in self._invitations.load_or_empty() if i.workspace_id != workspace_id]
        )
        return True

    def get_user_workspaces(self, user_id: str) -> list[Workspace]:
        """Workspaces the user owns or is a member of, in creation order."""
        member_of = {
            m.workspace_id for m in self._members.load_or_empty() if m.user_id == user_id
        }
        return [w for w in self.list_workspaces() if w.owner_id == user_id or w.id in member_of]

    def create_default_workspace(self, user_id: str, display_name: str) -> Workspace:
        """Create a personal workspace with its owner membership and a creation entry."""
        workspace = self.create_workspace(
            f"{display_name}'s Library",
            user_id,
            description="My personal library workspace",
        )
        self.add_member(
            WorkspaceMember(
                user_id=user_id,
                workspace_id=workspace.id,
                role=WorkspaceRole.OWNER,
                joined_at=self.now(),
            )
        )
        self.record_activity(
            workspace.id,
            user_id,
            ActivityAction.CREATED,
            ActivityResource.WORKSPACE,
            workspace.id,
            details={"name": workspace.name},
        )
        return workspace

    def ensure_default_workspace(self, user_id: str, display_name: str) -> list[Workspace]:
        """Return the user's workspaces, creating a personal one if they have none."""
        workspaces = self.get_user_workspaces(user_id)
        if workspaces:
            return workspaces
        logger.info("No workspaces for %s, creating a default one", user_id)
        return [self.create_default_workspace(user_id, display_name)]

    # --- Members ---

    def get_members(self, workspace_id: str) -> list[WorkspaceMember]:
        return [m for m in self._members.load_or_empty() if m.workspace_id == workspace_id]

    def get_member(self, workspace_id: str, user_id: str) -> WorkspaceMember | None:
        return next((m for m in self.get_members(workspace_id) if m.user_id == user_id), None)

    def role_of(self, workspace_id: str, user_id: str) -> WorkspaceRole | None:
        """The user's role in a workspace. The workspace owner is always OWNER."""
        member = self.get_member(workspace_id, user_id)
        if member is not None:
            return member.role
        workspace = self.get_workspace(workspace_id)
        if workspace is not None and workspace.owner_id == user_id:
            return WorkspaceRole.OWNER
        return None

    def add_member(self, member: WorkspaceMember) -> WorkspaceMember:
        """Append a membership row. Duplicates are not checked."""
        members = self._members.load_or_empty()
        members.append(member)
        self._members.save(members)
        return member

    def update_member(
        self, workspace_id: str, user_id: str, patch: MemberPatch
    ) -> WorkspaceMember | None:
        members = self._members.load_or_empty()
        member = next(
            (m for m in members if m.workspace_id == workspace_id and m.user_id == user_id), None
        )
        if member is None:
            return None
        patch.apply(member)
        self._members.save(members)
        return member

    def remove_member(self, workspace_id: str, user_id: str) -> bool:
        members = self._members.load_or_empty()
        remaining = [
            m for m in members if not (m.workspace_id == workspace_id and m.user_id == user_id)
        ]
        if len(remaining) == len(members):
            return False
        self._members.save(remaining)
        return True

    # --- Activities ---

    def record_activity(
        self,
        workspace_id: str,
        user_id: str,
        action: ActivityAction,
        resource_type: ActivityResource,
        resource_id: str,
        details: dict[str, Any] | None = None,
    ) -> WorkspaceActivity:
        """Append an entry to the workspace activity log."""
        activity = WorkspaceActivity(
            id=_new_id("activity"),
            workspace_id=workspace_id,
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            timestamp=self.now(),
            details=details or {},
        )
        activities = self._activities.load_or_empty()
        activities.append(activity)
        self._activities.save(activities)
        return activity

    def list_activities(
        self, workspace_id: str, limit: int | None = None
    ) -> list[WorkspaceActivity]:
        """Activity for a workspace, newest first, optionally truncated to limit.

        Entries with equal timestamps keep reverse insertion order.
        """
        activities = [
            a for a in reversed(self._activities.load_or_empty()) if a.workspace_id == workspace_id
        ]
        activities.sort(key=lambda a: parse_timestamp(a.timestamp), reverse=True)
        return activities[:limit] if limit else activities

    # --- Invitations ---

    def list_invitations(self, workspace_id: str) -> list[WorkspaceInvitation]:
        return [i for i in self._invitations.load_or_empty() if i.workspace_id == workspace_id]

    def get_invitation_by_token(self, token: str) -> WorkspaceInvitation | None:
        return next((i for i in self._invitations.load_or_empty() if i.token == token), None)

    def create_invitation(
        self,
        workspace_id: str,
        email: str,
        role: WorkspaceRole,
        invited_by: str,
        *,
        ttl: timedelta = INVITATION_TTL,
    ) -> WorkspaceInvitation:
        """Store a pending invitation with a fresh opaque token.

        expires_at is recorded but nothing moves a lapsed invitation to
        EXPIRED on its own.
        """
        now = self._clock()
        invitation = WorkspaceInvitation(
            id=_new_id("invitation"),
            workspace_id=workspace_id,
            email=email,
            role=role,
            invited_by=invited_by,
            invited_at=iso_timestamp(now),
            expires_at=iso_timestamp(now + ttl),
            status=InvitationStatus.PENDING,
            token=secrets.token_urlsafe(24),
        )
        invitations = self._invitations.load_or_empty()
        invitations.append(invitation)
        self._invitations.save(invitations)
        return invitation

    def update_invitation(
        self, invitation_id: str, status: InvitationStatus
    ) -> WorkspaceInvitation | None:
        invitations = self._invitations.load_or_empty()
        invitation = next((i for i in invitations if i.id == invitation_id), None)
        if invitation is None:
            return None
        invitation.status = status
        self._invitations.save(invitations)
        return invitation

    def is_invitation_expired(self, invitation: WorkspaceInvitation) -> bool:
        """Whether the invitation's expiry time has passed, regardless of its status."""
        return parse_timestamp(invitation.expires_at) <= self._clock()
