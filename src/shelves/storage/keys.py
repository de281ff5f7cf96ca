# ABOUTME: Persistence key names for every Shelves collection.
# ABOUTME: Workspace-scoped collections append the workspace id to the base key.

BOOKS_KEY = "library_books"
BORROWINGS_KEY = "library_borrowings"
FAVORITES_KEY = "user_favorites"
WORKSPACES_KEY = "ai-shelves-workspaces"
MEMBERS_KEY = "ai-shelves-workspace-members"
ACTIVITIES_KEY = "ai-shelves-workspace-activities"
INVITATIONS_KEY = "ai-shelves-workspace-invitations"
GEMINI_API_KEY_KEY = "gemini_api_key"


def scoped_key(base: str, workspace_id: str | None) -> str:
    """Return the key for a collection, suffixed with the workspace id when scoped."""
    if workspace_id is None:
        return base
    return f"{base}_{workspace_id}"
