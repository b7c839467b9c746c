"""
Account Repository.

SQLite access for ``Account`` rows.  This is the record interface the
account store is written against: ``insert_unique`` and ``find_one``,
plus a few read helpers.
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from pydantic import ValidationError

from consultations.database import DatabaseManager
from consultations.logger import StructuredLogger
from consultations.models.account import Account
from consultations.repositories.base_repository import BaseRepository, PersistenceError


class AccountRepository(BaseRepository):
    """Data access layer for Account entities.

    Callers pass emails already normalised; the UNIQUE index on
    ``accounts.email`` is what makes one-account-per-email hold.
    """

    TABLE = "accounts"

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        super().__init__(db, logger)

    def insert_unique(self, account: Account) -> Optional[int]:
        """Insert *account* and return the generated id.

        The ``id`` on *account* is ignored.  Returns ``None`` if SQLite
        reports no row id for the insert.

        Raises:
            DuplicateRecordError: The email is already registered.
            PersistenceError: Any other storage failure.
        """
        try:
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    f"INSERT INTO {self.TABLE} (full_name, email, password) "
                    "VALUES (?, ?, ?)",
                    (account.full_name, account.email, account.password),
                )
                new_id = cursor.lastrowid
        except sqlite3.Error as exc:
            raise self._translate_error(exc, "insert_unique") from exc

        self._logger.info("Account row inserted: %s", new_id)
        return new_id

    def find_one(self, email: str, password: str) -> Optional[Account]:
        """Return the account with exactly this email and password, if any.

        Raises:
            PersistenceError: The lookup failed or the stored row is unreadable.
        """
        try:
            row = self.sqlite.execute(
                f"SELECT * FROM {self.TABLE} WHERE email = ? AND password = ?",
                (email, password),
            ).fetchone()
        except sqlite3.Error as exc:
            raise self._translate_error(exc, "find_one") from exc
        return self._to_account(row, "find_one")

    def get_by_email(self, email: str) -> Optional[Account]:
        """Fetch an account by its (normalised) email."""
        try:
            row = self.sqlite.execute(
                f"SELECT * FROM {self.TABLE} WHERE email = ?", (email,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise self._translate_error(exc, "get_by_email") from exc
        return self._to_account(row, "get_by_email")

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Fetch an account by primary key."""
        try:
            row = self.sqlite.execute(
                f"SELECT * FROM {self.TABLE} WHERE id = ?", (account_id,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise self._translate_error(exc, "get_by_id") from exc
        return self._to_account(row, "get_by_id")

    def count(self) -> int:
        """Number of registered accounts."""
        try:
            row = self.sqlite.execute(
                f"SELECT COUNT(*) AS cnt FROM {self.TABLE}"
            ).fetchone()
        except sqlite3.Error as exc:
            raise self._translate_error(exc, "count") from exc
        return int(row["cnt"]) if row else 0

    def _to_account(self, row: Optional[sqlite3.Row], operation_name: str) -> Optional[Account]:
        """Map a row onto ``Account``; a row that does not fit is a storage fault."""
        if row is None:
            return None
        try:
            return Account(**dict(row))
        except ValidationError as exc:
            raise PersistenceError(
                f"{operation_name} ({self.TABLE}): unreadable row id={row['id']}: {exc}"
            ) from exc
