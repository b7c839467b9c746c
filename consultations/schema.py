"""
SQLite Schema Initialization.

Creates the local tables idempotently and records the applied version in a
single-row ``schema_version`` table.

The ``accounts.email`` column carries a UNIQUE index.  Emails are
normalised (trimmed, lower-cased) before they reach the database, so the
index alone guarantees one account per normalised email, and SQLite
checks it atomically with the insert.

Usage::

    from consultations.schema import initialize_schema

    initialize_schema(db.sqlite, StructuredLogger(name="consultations.schema"))
"""

from __future__ import annotations

import sqlite3

from consultations.logger import StructuredLogger

__all__ = ["CURRENT_SCHEMA_VERSION", "initialize_schema"]

CURRENT_SCHEMA_VERSION: int = 1

_TABLE_DEFINITIONS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        full_name TEXT NOT NULL CHECK (length(trim(full_name)) > 0),
        email TEXT NOT NULL,
        password TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
]

_INDEX_DEFINITIONS: list[str] = [
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_accounts_email ON accounts(email)",
]


def _ensure_version_table(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_version (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            version INTEGER NOT NULL,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    conn.commit()


def _get_schema_version(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    return int(row[0]) if row else 0


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    conn.execute(
        """
        INSERT INTO schema_version (id, version) VALUES (1, ?)
        ON CONFLICT(id) DO UPDATE SET
            version = excluded.version,
            applied_at = CURRENT_TIMESTAMP
        """,
        (version,),
    )


def _create_all_tables(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    for ddl in _TABLE_DEFINITIONS:
        conn.execute(ddl)
    for ddl in _INDEX_DEFINITIONS:
        conn.execute(ddl)
    logger.info("Created %d tables on a fresh database.", len(_TABLE_DEFINITIONS))


def initialize_schema(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    """Bring the database up to :data:`CURRENT_SCHEMA_VERSION`.

    Safe to call on every start-up.  A fresh database gets every table in
    one shot; the tables and the version row commit together or not at all.

    Args:
        conn: An open SQLite connection.
        logger: Structured logger for progress messages.
    """
    _ensure_version_table(conn)
    current: int = _get_schema_version(conn)

    if current >= CURRENT_SCHEMA_VERSION:
        logger.info("Schema is up to date (version %d).", current)
        return

    try:
        _create_all_tables(conn, logger)
        _set_schema_version(conn, CURRENT_SCHEMA_VERSION)
        conn.commit()
    except Exception:
        conn.rollback()
        logger.error("Schema creation failed; rolled back to version %d.", current)
        raise

    logger.info("Schema initialised at version %d.", CURRENT_SCHEMA_VERSION)
