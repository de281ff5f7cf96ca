# ABOUTME: Unit tests for the SQLite-backed key-value store.
# ABOUTME: Covers schema creation, upserts, removal, and connection settings.

import sqlite3
from pathlib import Path

from shelves.storage.port import KeyValueStore
from shelves.storage.sqlite import open_store


class TestOpenStore:
    """Tests for opening and initializing the store file."""

    def test_creates_file_and_parents(self, tmp_path: Path) -> None:
        """open_store creates missing parent directories and the file."""
        path = tmp_path / "nested" / "dir" / "store.db"
        with open_store(path):
            pass
        assert path.exists()

    def test_satisfies_protocol(self, store_path: Path) -> None:
        """SqliteStore implements KeyValueStore."""
        with open_store(store_path) as store:
            assert isinstance(store, KeyValueStore)

    def test_only_kv_table_created(self, store_path: Path) -> None:
        """The store file holds just the kv table."""
        with open_store(store_path):
            pass
        conn = sqlite3.connect(store_path)
        names = {
            row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        conn.close()
        assert names == {"kv"}

    def test_reopen_keeps_data(self, store_path: Path) -> None:
        """Opening an existing store leaves its values in place."""
        with open_store(store_path) as store:
            store.set("k", "[1]")
        with open_store(store_path) as store:
            assert store.get("k") == "[1]"
            assert store.keys() == ["k"]

    def test_wal_mode(self, store_path: Path) -> None:
        """The store uses WAL journaling."""
        with open_store(store_path):
            pass
        conn = sqlite3.connect(store_path)
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        conn.close()
        assert mode == "wal"


class TestSqliteStore:
    """Tests for get/set/remove on the kv table."""

    def test_get_missing_returns_none(self, store_path: Path) -> None:
        """An unknown key reads as None."""
        with open_store(store_path) as store:
            assert store.get("nope") is None

    def test_set_upserts(self, store_path: Path) -> None:
        """Setting an existing key replaces its value."""
        with open_store(store_path) as store:
            store.set("k", "one")
            store.set("k", "two")
            assert store.get("k") == "two"
            assert store.keys() == ["k"]

    def test_remove(self, store_path: Path) -> None:
        """remove() deletes the key."""
        with open_store(store_path) as store:
            store.set("k", "one")
            store.remove("k")
            assert store.get("k") is None
