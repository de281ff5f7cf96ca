# ABOUTME: SQL DDL for the SQLite-backed key-value store.
# ABOUTME: A single kv table; each row holds one whole serialized collection.

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);
"""
