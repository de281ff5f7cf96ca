# ABOUTME: Public API for the Shelves persistence substrate.
# ABOUTME: Exports the key-value port, its implementations, and the JSON collection helper.

from shelves.storage.collection import JsonCollection
from shelves.storage.port import KeyValueStore, MemoryStore, StorageQuotaExceededError
from shelves.storage.sqlite import DEFAULT_STORE_PATH, SqliteStore, open_store

__all__ = [
    "DEFAULT_STORE_PATH",
    "JsonCollection",
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "StorageQuotaExceededError",
    "open_store",
]
