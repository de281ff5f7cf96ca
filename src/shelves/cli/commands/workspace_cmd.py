# ABOUTME: The `shelves workspace` command group for shared collections and their members.
# ABOUTME: Creation, listing, membership, invitations, settings, and the activity log.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelves.cli.options import store_option, user_option
from shelves.cli.session import open_session, reported_errors
from shelves.workspace.roles import ROLE_ORDER, Capability, WorkspaceRole, require
from shelves.workspace.types import InvitationStatus, WorkspacePatch

console = Console()

_ROLE_NAMES = [role.value for role in ROLE_ORDER]


@click.group("workspace")
def workspace() -> None:
    """Manage workspaces and their members."""


@workspace.command("create")
@click.argument("name")
@click.option("--description", default=None)
@store_option
@user_option
def ws_create(name: str, description: str | None, store_path: Path | None, user_id: str) -> None:
    """Create a workspace owned by the acting user."""
    with open_session(store_path, user_id) as session:
        created = session.membership.create_workspace(user_id, name, description)
    console.print(f"Created workspace [bold]{created.name}[/bold] ([cyan]{created.id}[/cyan]).")


@workspace.command("ls")
@store_option
@user_option
def ws_ls(store_path: Path | None, user_id: str) -> None:
    """List your workspaces, creating a personal one on first use."""
    with open_session(store_path, user_id) as session:
        workspaces = session.manager.ensure_default_workspace(user_id, user_id)
        roles = {w.id: session.manager.role_of(w.id, user_id) for w in workspaces}

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Role")
    table.add_column("Borrowing")
    for item in workspaces:
        role = roles[item.id]
        table.add_row(
            item.id,
            item.name,
            role.value if role else "-",
            "on" if item.settings.borrowing_enabled else "off",
        )
    console.print(table)


@workspace.command("rm")
@click.argument("workspace_id")
@store_option
@user_option
def ws_rm(workspace_id: str, store_path: Path | None, user_id: str) -> None:
    """Delete a workspace with its members, activity, and invitations."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        deleted = session.membership.delete_workspace(user_id, workspace_id)
    if not deleted:
        console.print(f"[red]Workspace {workspace_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Deleted workspace {workspace_id}.")


@workspace.command("update")
@click.argument("workspace_id")
@click.option("--name", default=None)
@click.option("--description", default=None)
@click.option("--borrowing/--no-borrowing", default=None, help="Allow check-outs.")
@click.option("--max-borrow-days", type=click.IntRange(min=1), default=None)
@store_option
@user_option
def ws_update(
    workspace_id: str,
    name: str | None,
    description: str | None,
    borrowing: bool | None,
    max_borrow_days: int | None,
    store_path: Path | None,
    user_id: str,
) -> None:
    """Rename a workspace or change its borrowing settings."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        current = session.manager.get_workspace(workspace_id)
        if current is None:
            console.print(f"[red]Workspace {workspace_id} not found.[/red]")
            raise SystemExit(1)

        settings = None
        if borrowing is not None or max_borrow_days is not None:
            settings = current.settings
            if borrowing is not None:
                settings.borrowing_enabled = borrowing
            if max_borrow_days is not None:
                settings.max_borrow_duration = max_borrow_days
        patch = WorkspacePatch(name=name, description=description, settings=settings)
        updated = session.membership.update_workspace(user_id, workspace_id, patch)

    if updated is not None:
        console.print(f"Updated workspace [bold]{updated.name}[/bold].")


@workspace.command("members")
@click.argument("workspace_id")
@store_option
@user_option
def ws_members(workspace_id: str, store_path: Path | None, user_id: str) -> None:
    """List a workspace's members and pending invitations."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        actor = session.membership.actor(workspace_id, user_id)
        require(actor, Capability.VIEW_BOOKS, "view members")
        members = session.manager.get_members(workspace_id)
        pending = [
            invitation
            for invitation in session.manager.list_invitations(workspace_id)
            if invitation.status is InvitationStatus.PENDING
        ]

    if not members:
        console.print(f"[yellow]No members in {workspace_id}.[/yellow]")
        return

    table = Table()
    table.add_column("User", style="bold")
    table.add_column("Role")
    table.add_column("Joined")
    table.add_column("Invited by", style="dim")
    for member in members:
        table.add_row(
            member.user_id, member.role.value, member.joined_at[:10], member.invited_by or ""
        )
    console.print(table)

    for invitation in pending:
        console.print(
            f"[dim]Pending: {invitation.email} as {invitation.role.value}, "
            f"expires {invitation.expires_at[:10]}[/dim]"
        )


@workspace.command("invite")
@click.argument("workspace_id")
@click.argument("email")
@click.option(
    "--role",
    type=click.Choice(_ROLE_NAMES[1:]),
    default=WorkspaceRole.MEMBER.value,
    show_default=True,
)
@store_option
@user_option
def ws_invite(
    workspace_id: str, email: str, role: str, store_path: Path | None, user_id: str
) -> None:
    """Invite someone by email. Prints the token they accept with."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        invitation = session.membership.invite_member(user_id, workspace_id, email, role)

    if invitation is None:
        console.print(f"[red]Workspace {workspace_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Invited {invitation.email} as {invitation.role.value}.")
    console.print(f"Token: [cyan]{invitation.token}[/cyan]")


@workspace.command("accept")
@click.argument("token")
@store_option
@user_option
def ws_accept(token: str, store_path: Path | None, user_id: str) -> None:
    """Join a workspace with an invitation token."""
    with open_session(store_path, user_id) as session:
        member = session.membership.accept_invitation(token, user_id)

    if member is None:
        console.print("[red]Invitation is invalid, used, or expired.[/red]")
        raise SystemExit(1)
    console.print(f"Joined {member.workspace_id} as {member.role.value}.")


@workspace.command("role")
@click.argument("workspace_id")
@click.argument("member_id")
@click.argument("role", type=click.Choice(_ROLE_NAMES[1:]))
@store_option
@user_option
def ws_role(
    workspace_id: str, member_id: str, role: str, store_path: Path | None, user_id: str
) -> None:
    """Change a member's role."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        member = session.membership.change_role(user_id, workspace_id, member_id, role)

    if member is None:
        console.print(f"[red]{member_id} is not a member of {workspace_id}.[/red]")
        raise SystemExit(1)
    console.print(f"{member_id} is now {member.role.value}.")


@workspace.command("kick")
@click.argument("workspace_id")
@click.argument("member_id")
@store_option
@user_option
def ws_kick(workspace_id: str, member_id: str, store_path: Path | None, user_id: str) -> None:
    """Remove a member from a workspace."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        removed = session.membership.remove_member(user_id, workspace_id, member_id)

    if not removed:
        console.print(f"[red]{member_id} is not a member of {workspace_id}.[/red]")
        raise SystemExit(1)
    console.print(f"Removed {member_id} from {workspace_id}.")


@workspace.command("leave")
@click.argument("workspace_id")
@store_option
@user_option
def ws_leave(workspace_id: str, store_path: Path | None, user_id: str) -> None:
    """Leave a workspace you belong to."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        left = session.membership.leave_workspace(user_id, workspace_id)

    if not left:
        console.print(f"[red]You are not a member of {workspace_id}.[/red]")
        raise SystemExit(1)
    console.print(f"Left {workspace_id}.")


@workspace.command("activity")
@click.argument("workspace_id")
@click.option("--limit", type=int, default=20, show_default=True)
@store_option
@user_option
def ws_activity(workspace_id: str, limit: int, store_path: Path | None, user_id: str) -> None:
    """Show recent activity, newest first."""
    with reported_errors(console), open_session(store_path, user_id) as session:
        actor = session.membership.actor(workspace_id, user_id)
        require(actor, Capability.VIEW_BOOKS, "view activity")
        entries = session.manager.list_activities(workspace_id, limit)

    if not entries:
        console.print("[yellow]No activity yet.[/yellow]")
        return

    table = Table()
    table.add_column("When", style="dim")
    table.add_column("User")
    table.add_column("Action", style="bold")
    table.add_column("Resource")
    table.add_column("Details")
    for entry in entries:
        details = ", ".join(f"{k}={v}" for k, v in entry.details.items())
        table.add_row(
            entry.timestamp[:19].replace("T", " "),
            entry.user_id,
            entry.action.value,
            f"{entry.resource_type.value} {entry.resource_id}",
            details,
        )
    console.print(table)
