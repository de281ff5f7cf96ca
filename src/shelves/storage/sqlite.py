# ABOUTME: SQLite implementation of the KeyValueStore port.
# ABOUTME: Opens or creates the store file, applies the schema, and upserts whole values.

import sqlite3
from pathlib import Path
from types import TracebackType

from shelves.storage.schema import SCHEMA

DEFAULT_STORE_PATH = Path.home() / ".shelves" / "store.db"


class SqliteStore:
    """KeyValueStore backed by a single `kv` table.

    Every set() is its own commit, so a collection write either fully lands
    or leaves the previous value. sqlite3 errors (disk full, locked database)
    propagate to the caller.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, key: str) -> str | None:
        cursor = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self._conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
            "updated_at = strftime('%Y-%m-%dT%H:%M:%S', 'now')",
            (key, value),
        )
        self._conn.commit()

    def remove(self, key: str) -> None:
        self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        self._conn.commit()

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        cursor = self._conn.execute("SELECT key FROM kv ORDER BY key")
        return [row["key"] for row in cursor.fetchall()]

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SqliteStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def open_store(path: Path | None = None) -> SqliteStore:
    """Open or create the Shelves key-value store.

    Creates the database file and parent directories if they don't exist.
    Creates the kv table if it is missing. Sets WAL journal mode and
    sqlite3.Row factory for dict-like column access.

    Args:
        path: Path to the store file. Defaults to ~/.shelves/store.db.

    Returns:
        A SqliteStore wrapping the configured connection.
    """
    store_path = path or DEFAULT_STORE_PATH
    store_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(store_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    conn.executescript(SCHEMA)

    return SqliteStore(conn)
