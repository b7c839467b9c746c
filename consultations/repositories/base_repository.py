"""
Base Repository.

Shared plumbing for repositories: the ``DatabaseManager`` and logger
references, plus the typed errors repositories raise.  SQLite exceptions
are translated here so callers never have to inspect a raw
``sqlite3.Error`` to learn what went wrong.
"""

from __future__ import annotations

import sqlite3

from consultations.database import DatabaseManager
from consultations.logger import StructuredLogger

_UNIQUE_ERRORCODES: frozenset[int] = frozenset({
    sqlite3.SQLITE_CONSTRAINT_UNIQUE,
    sqlite3.SQLITE_CONSTRAINT_PRIMARYKEY,
})


class PersistenceError(Exception):
    """A storage operation failed for a reason other than a constraint."""


class DuplicateRecordError(PersistenceError):
    """An insert was rejected by a uniqueness constraint."""


class BaseRepository:
    """Base class for all repositories. Receives dependencies via __init__."""

    TABLE: str = ""

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        self._db = db
        self._logger = logger

    @property
    def sqlite(self) -> sqlite3.Connection:
        """The SQLite connection owned by the ``DatabaseManager``."""
        return self._db.sqlite

    def _translate_error(self, exc: sqlite3.Error, operation_name: str) -> PersistenceError:
        """Map a SQLite exception onto the repository error hierarchy.

        Uniqueness violations are recognised by their extended result code,
        never by the message text.
        """
        if (
            isinstance(exc, sqlite3.IntegrityError)
            and getattr(exc, "sqlite_errorcode", None) in _UNIQUE_ERRORCODES
        ):
            return DuplicateRecordError(f"{operation_name} ({self.TABLE}): {exc}")
        return PersistenceError(f"{operation_name} ({self.TABLE}) failed: {exc}")
