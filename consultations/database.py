"""
Local Database Connection.

The application is fully local: every account lives in a single SQLite
file on the user's machine.  ``DatabaseManager`` owns that connection and
the write lock that serialises writers coming from the UI thread and the
auth worker thread.  It contains no query logic; repositories do.

Usage::

    db = DatabaseManager(
        sqlite_path=Path("consultations_local.db"),
        logger=StructuredLogger(name="consultations.database"),
    )
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from consultations.logger import StructuredLogger


class DatabaseManager:
    """Owns the SQLite connection for the lifetime of the application.

    Parameters
    ----------
    sqlite_path:
        Filesystem path for the database file, or ``":memory:"``.
    logger:
        A ``StructuredLogger`` for connection lifecycle messages.
    """

    def __init__(self, sqlite_path: Path | str, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
        self._write_lock: threading.RLock = threading.RLock()
        self._in_transaction: bool = False
        self._sqlite_conn: Optional[sqlite3.Connection] = self._connect_sqlite(sqlite_path)

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def sqlite(self) -> sqlite3.Connection:
        """Return the open SQLite connection.

        Raises
        ------
        sqlite3.ProgrammingError
            If :meth:`close` has already been called.  Same error SQLite
            raises for a closed connection, so repositories handle both
            alike.
        """
        if self._sqlite_conn is None:
            raise sqlite3.ProgrammingError("Cannot operate on a closed database.")
        return self._sqlite_conn

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Hold the write lock and commit once on exit, rolling back on error.

        Every INSERT, UPDATE and DELETE goes through here, so writers from
        the UI thread and the auth worker never interleave.

        Re-entrant: a nested block joins the outer transaction.
        """
        with self._write_lock:
            if self._in_transaction:
                yield self.sqlite
                return

            self._in_transaction = True
            conn = self.sqlite
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                self._logger.debug("Transaction rolled back.", exc_info=True)
                raise
            finally:
                self._in_transaction = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the connection.  Safe to call more than once."""
        with self._write_lock:
            if self._sqlite_conn is None:
                return
            try:
                self._sqlite_conn.close()
                self._logger.info("SQLite connection closed.")
            except sqlite3.ProgrammingError:
                pass
            finally:
                self._sqlite_conn = None

    def _connect_sqlite(self, path: Path | str) -> sqlite3.Connection:
        """Open (or create) the database file.

        Raises
        ------
        PermissionError
            If the OS denies access to the file or its directory; the
            message is suitable for showing to the user.
        """
        try:
            conn = sqlite3.connect(str(path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA foreign_keys = ON;")
            self._logger.info("SQLite database opened at %s", path)
            return conn
        except (PermissionError, sqlite3.OperationalError) as exc:
            msg = (
                f"Cannot open the local database at '{path}'. "
                "The file or its directory may be read-only or locked by "
                "another process.  Please check file permissions and try again."
            )
            self._logger.error(msg)
            raise PermissionError(msg) from exc
