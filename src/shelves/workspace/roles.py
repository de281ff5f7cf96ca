# ABOUTME: Workspace roles, the role -> capability allow-list table, and permission checks.
# ABOUTME: Capabilities are looked up per role, never inferred from role ordering.

from dataclasses import dataclass
from enum import Enum


class PermissionDeniedError(Exception):
    """Raised when the acting user's role does not grant the requested capability."""


class WorkspaceRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    LIBRARIAN = "librarian"
    MEMBER = "member"
    VIEWER = "viewer"


class Capability(str, Enum):
    VIEW_BOOKS = "view_books"
    BORROW_BOOKS = "borrow_books"
    MANAGE_BOOKS = "manage_books"
    INVITE_MEMBERS = "invite_members"
    MANAGE_MEMBERS = "manage_members"
    MANAGE_SETTINGS = "manage_settings"


ROLE_CAPABILITIES: dict[WorkspaceRole, frozenset[Capability]] = {
    WorkspaceRole.OWNER: frozenset(
        {
            Capability.VIEW_BOOKS,
            Capability.BORROW_BOOKS,
            Capability.MANAGE_BOOKS,
            Capability.INVITE_MEMBERS,
            Capability.MANAGE_MEMBERS,
            Capability.MANAGE_SETTINGS,
        }
    ),
    WorkspaceRole.ADMIN: frozenset(
        {
            Capability.VIEW_BOOKS,
            Capability.BORROW_BOOKS,
            Capability.MANAGE_BOOKS,
            Capability.INVITE_MEMBERS,
            Capability.MANAGE_MEMBERS,
            Capability.MANAGE_SETTINGS,
        }
    ),
    WorkspaceRole.LIBRARIAN: frozenset(
        {Capability.VIEW_BOOKS, Capability.BORROW_BOOKS, Capability.MANAGE_BOOKS}
    ),
    WorkspaceRole.MEMBER: frozenset({Capability.VIEW_BOOKS, Capability.BORROW_BOOKS}),
    WorkspaceRole.VIEWER: frozenset({Capability.VIEW_BOOKS}),
}

# Display order only (owner first). Not used for permission decisions.
ROLE_ORDER: tuple[WorkspaceRole, ...] = (
    WorkspaceRole.OWNER,
    WorkspaceRole.ADMIN,
    WorkspaceRole.LIBRARIAN,
    WorkspaceRole.MEMBER,
    WorkspaceRole.VIEWER,
)


def parse_role(value: "WorkspaceRole | str") -> WorkspaceRole:
    """Coerce a role name to WorkspaceRole.

    Raises:
        ValueError: If value is not a known role.
    """
    if isinstance(value, WorkspaceRole):
        return value
    try:
        return WorkspaceRole(value.strip().lower())
    except ValueError:
        valid = ", ".join(role.value for role in ROLE_ORDER)
        raise ValueError(f"Unknown role {value!r} (expected one of: {valid})") from None


def has_capability(role: "WorkspaceRole | str | None", capability: Capability) -> bool:
    """Whether role grants capability. Missing or unknown roles grant nothing."""
    if role is None:
        return False
    try:
        resolved = parse_role(role)
    except ValueError:
        return False
    return capability in ROLE_CAPABILITIES[resolved]


def can_view_books(role: "WorkspaceRole | str | None") -> bool:
    return has_capability(role, Capability.VIEW_BOOKS)


def can_borrow_books(role: "WorkspaceRole | str | None") -> bool:
    return has_capability(role, Capability.BORROW_BOOKS)


def can_manage_books(role: "WorkspaceRole | str | None") -> bool:
    return has_capability(role, Capability.MANAGE_BOOKS)


def can_invite_members(role: "WorkspaceRole | str | None") -> bool:
    return has_capability(role, Capability.INVITE_MEMBERS)


def can_manage_members(role: "WorkspaceRole | str | None") -> bool:
    return has_capability(role, Capability.MANAGE_MEMBERS)


def can_manage_settings(role: "WorkspaceRole | str | None") -> bool:
    return has_capability(role, Capability.MANAGE_SETTINGS)


@dataclass(frozen=True)
class Actor:
    """The user performing an operation and their role in the target workspace."""

    user_id: str
    role: WorkspaceRole | None = None


def require(actor: Actor | None, capability: Capability, action: str) -> Actor:
    """Return actor if it holds capability, otherwise raise.

    These checks run in-process only and are not a trust boundary; anything
    exposing this layer over a network has to repeat them server-side.

    Raises:
        PermissionDeniedError: If actor is None or its role lacks capability.
    """
    if actor is None:
        raise PermissionDeniedError(f"Cannot {action}: no acting user")
    if not has_capability(actor.role, capability):
        role_name = actor.role.value if actor.role else "no role"
        raise PermissionDeniedError(
            f"Cannot {action}: user {actor.user_id} ({role_name}) lacks {capability.value}"
        )
    return actor
