"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, Optional

from storenode.config import DATABASE_PATH


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                user_id TEXT PRIMARY KEY,
                username TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                api_key TEXT UNIQUE,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS keyspaces (
                name TEXT PRIMARY KEY,
                strategy_class TEXT NOT NULL,
                strategy_options TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS column_families (
                keyspace TEXT NOT NULL,
                name TEXT NOT NULL,
                binary_columns TEXT NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY(keyspace, name),
                FOREIGN KEY(keyspace) REFERENCES keyspaces(name) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS columns (
                keyspace TEXT NOT NULL,
                column_family TEXT NOT NULL,
                row_key BLOB NOT NULL,
                name BLOB NOT NULL,
                value BLOB NOT NULL,
                timestamp INTEGER NOT NULL,
                PRIMARY KEY(keyspace, column_family, row_key, name),
                FOREIGN KEY(keyspace, column_family)
                    REFERENCES column_families(keyspace, name) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS row_tombstones (
                keyspace TEXT NOT NULL,
                column_family TEXT NOT NULL,
                row_key BLOB NOT NULL,
                timestamp INTEGER NOT NULL,
                PRIMARY KEY(keyspace, column_family, row_key),
                FOREIGN KEY(keyspace, column_family)
                    REFERENCES column_families(keyspace, name) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_users_api_key ON users(api_key)
        """)

        conn.commit()


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()


def row_to_dict(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    """
    Convert a sqlite3.Row into a plain dictionary.

    Args:
        row: Row returned by a cursor, or None

    Returns:
        Dictionary of column values, or None if row is None
    """
    if row is None:
        return None
    return {key: row[key] for key in row.keys()}
