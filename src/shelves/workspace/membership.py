# ABOUTME: MembershipService: permission-checked membership actions on top of WorkspaceManager.
# ABOUTME: Invitations, role changes, removals, leaving, and settings, each logged as activity.

import logging

from shelves.workspace.manager import WorkspaceManager
from shelves.workspace.roles import (
    Actor,
    Capability,
    PermissionDeniedError,
    WorkspaceRole,
    parse_role,
    require,
)
from shelves.workspace.types import (
    ActivityAction,
    ActivityResource,
    InvitationStatus,
    MemberPatch,
    Workspace,
    WorkspaceInvitation,
    WorkspaceMember,
    WorkspacePatch,
)

logger = logging.getLogger(__name__)


class MembershipService:
    """Membership workflows acting on behalf of a user.

    The acting user's role is resolved from the workspace before every
    action. The workspace owner can never be demoted, removed, or leave.
    """

    def __init__(self, manager: WorkspaceManager) -> None:
        self._manager = manager

    def actor(self, workspace_id: str, user_id: str) -> Actor:
        """Build an Actor carrying user_id's role in workspace_id (None if not a member)."""
        return Actor(user_id=user_id, role=self._manager.role_of(workspace_id, user_id))

    def create_workspace(
        self, owner_id: str, name: str, description: str | None = None
    ) -> Workspace:
        """Create a workspace, add its owner as a member, and log the creation."""
        workspace = self._manager.create_workspace(name, owner_id, description=description)
        self._manager.add_member(
            WorkspaceMember(
                user_id=owner_id,
                workspace_id=workspace.id,
                role=WorkspaceRole.OWNER,
                joined_at=self._manager.now(),
            )
        )
        self._manager.record_activity(
            workspace.id,
            owner_id,
            ActivityAction.CREATED,
            ActivityResource.WORKSPACE,
            workspace.id,
            details={"name": name},
        )
        return workspace

    def invite_member(
        self,
        actor_id: str,
        workspace_id: str,
        email: str,
        role: WorkspaceRole | str = WorkspaceRole.MEMBER,
    ) -> WorkspaceInvitation | None:
        """Invite an email address to join with role.

        Returns:
            The pending invitation, or None if the workspace does not exist.

        Raises:
            PermissionDeniedError: If the actor cannot invite members, or role is owner.
            ValueError: If email is blank or role is unknown.
        """
        if self._manager.get_workspace(workspace_id) is None:
            return None
        require(self.actor(workspace_id, actor_id), Capability.INVITE_MEMBERS, "invite members")

        resolved = parse_role(role)
        if resolved is WorkspaceRole.OWNER:
            raise PermissionDeniedError("Cannot invite a second owner")
        address = email.strip()
        if not address:
            raise ValueError("An email address is required")

        invitation = self._manager.create_invitation(workspace_id, address, resolved, actor_id)
        self._manager.record_activity(
            workspace_id,
            actor_id,
            ActivityAction.INVITED,
            ActivityResource.MEMBER,
            invitation.id,
            details={"email": address, "role": resolved.value},
        )
        return invitation

    def accept_invitation(self, token: str, user_id: str) -> WorkspaceMember | None:
        """Join the invitation's workspace with its role.

        Returns:
            The membership, or None if the token is unknown, the invitation is
            no longer pending, or its expiry time has passed.
        """
        invitation = self._manager.get_invitation_by_token(token)
        if invitation is None or invitation.status is not InvitationStatus.PENDING:
            return None
        if self._manager.is_invitation_expired(invitation):
            logger.info("Invitation %s expired at %s", invitation.id, invitation.expires_at)
            return None

        self._manager.update_invitation(invitation.id, InvitationStatus.ACCEPTED)
        existing = self._manager.get_member(invitation.workspace_id, user_id)
        if existing is not None:
            return existing

        member = self._manager.add_member(
            WorkspaceMember(
                user_id=user_id,
                workspace_id=invitation.workspace_id,
                role=invitation.role,
                joined_at=self._manager.now(),
                invited_by=invitation.invited_by,
            )
        )
        self._manager.record_activity(
            invitation.workspace_id,
            user_id,
            ActivityAction.JOINED,
            ActivityResource.MEMBER,
            user_id,
            details={"role": invitation.role.value, "invitationId": invitation.id},
        )
        return member

    def decline_invitation(self, token: str) -> bool:
        """Mark a pending invitation declined. False if unknown or not pending."""
        invitation = self._manager.get_invitation_by_token(token)
        if invitation is None or invitation.status is not InvitationStatus.PENDING:
            return False
        self._manager.update_invitation(invitation.id, InvitationStatus.DECLINED)
        return True

    def change_role(
        self, actor_id: str, workspace_id: str, user_id: str, role: WorkspaceRole | str
    ) -> WorkspaceMember | None:
        """Change a member's role.

        Returns:
            The updated member, or None if user_id is not a member.

        Raises:
            PermissionDeniedError: If the actor cannot manage members, the target
                is the owner, or the new role is owner.
        """
        require(self.actor(workspace_id, actor_id), Capability.MANAGE_MEMBERS, "change roles")
        resolved = parse_role(role)
        self._refuse_owner(workspace_id, user_id, "change the owner's role")
        if resolved is WorkspaceRole.OWNER:
            raise PermissionDeniedError("Ownership cannot be transferred by a role change")

        member = self._manager.update_member(workspace_id, user_id, MemberPatch(role=resolved))
        if member is not None:
            self._manager.record_activity(
                workspace_id,
                actor_id,
                ActivityAction.UPDATED,
                ActivityResource.MEMBER,
                user_id,
                details={"role": resolved.value},
            )
        return member

    def remove_member(self, actor_id: str, workspace_id: str, user_id: str) -> bool:
        """Remove another user from the workspace.

        Raises:
            PermissionDeniedError: If the actor cannot manage members or the target is the owner.
        """
        require(self.actor(workspace_id, actor_id), Capability.MANAGE_MEMBERS, "remove members")
        self._refuse_owner(workspace_id, user_id, "remove the workspace owner")
        removed = self._manager.remove_member(workspace_id, user_id)
        if removed:
            self._manager.record_activity(
                workspace_id,
                actor_id,
                ActivityAction.DELETED,
                ActivityResource.MEMBER,
                user_id,
            )
        return removed

    def leave_workspace(self, user_id: str, workspace_id: str) -> bool:
        """Remove the user's own membership. False if they were not a member.

        Raises:
            PermissionDeniedError: If the user owns the workspace.
        """
        self._refuse_owner(workspace_id, user_id, "leave a workspace you own")
        left = self._manager.remove_member(workspace_id, user_id)
        if left:
            self._manager.record_activity(
                workspace_id, user_id, ActivityAction.LEFT, ActivityResource.MEMBER, user_id
            )
        return left

    def update_workspace(
        self, actor_id: str, workspace_id: str, patch: WorkspacePatch
    ) -> Workspace | None:
        """Edit workspace details or settings.

        Raises:
            PermissionDeniedError: If the actor cannot manage settings.
        """
        require(
            self.actor(workspace_id, actor_id), Capability.MANAGE_SETTINGS, "change settings"
        )
        workspace = self._manager.update_workspace(workspace_id, patch)
        if workspace is not None:
            resource = (
                ActivityResource.SETTINGS if patch.settings is not None
                else ActivityResource.WORKSPACE
            )
            self._manager.record_activity(
                workspace_id, actor_id, ActivityAction.UPDATED, resource, workspace_id
            )
        return workspace

    def delete_workspace(self, actor_id: str, workspace_id: str) -> bool:
        """Delete a workspace and everything scoped to it. Only the owner may do this.

        Raises:
            PermissionDeniedError: If the actor does not own the workspace.
        """
        workspace = self._manager.get_workspace(workspace_id)
        if workspace is None:
            return False
        if workspace.owner_id != actor_id:
            raise PermissionDeniedError("Only the owner can delete a workspace")
        logger.info("Deleting workspace %s (%s)", workspace_id, workspace.name)
        return self._manager.delete_workspace(workspace_id)

    def _refuse_owner(self, workspace_id: str, user_id: str, action: str) -> None:
        workspace = self._manager.get_workspace(workspace_id)
        if workspace is not None and workspace.owner_id == user_id:
            raise PermissionDeniedError(f"Cannot {action}")
