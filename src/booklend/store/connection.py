# ABOUTME: SQLite connection management for the booklend store.
# ABOUTME: Opens or creates the database, applies schema and migrations.

import sqlite3
from pathlib import Path

from booklend.store.schema import MIGRATIONS, SCHEMA_V1

_BUSY_TIMEOUT = 5.0


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending schema migrations sequentially.

    No-op if the database is already at the latest version.
    """
    current = _get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            conn.executescript(sql)


def open_store(path: Path) -> sqlite3.Connection:
    """Open or create the booklend database.

    Creates the database file and parent directories if they don't exist.
    Applies the schema on first creation and any pending migrations.
    ``check_same_thread`` is off because the ledger serializes writers
    itself.

    Args:
        path: Path to the database file.

    Returns:
        A configured sqlite3.Connection.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path), timeout=_BUSY_TIMEOUT, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    if not _schema_exists(conn):
        conn.executescript(SCHEMA_V1)

    _apply_migrations(conn)

    return conn
