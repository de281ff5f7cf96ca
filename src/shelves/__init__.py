# ABOUTME: Shelves - a library catalog record manager over a key-value store.
# ABOUTME: Books, borrowing, favorites, and role-based workspaces.

__version__ = "0.1.0"
