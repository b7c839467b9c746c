"""
Account Store.

The persistence boundary for local accounts.  ``register`` and ``login``
always return an ``AccountOutcome``; repository exceptions are caught here and
turned into ``Error`` values, so nothing raised by the storage layer
reaches the controller or the UI.

The methods are blocking.  ``AuthController`` runs them on its worker
thread.
"""

from __future__ import annotations

import sqlite3

from consultations.logger import StructuredLogger
from consultations.models.account import Account
from consultations.models.enums import AccountErrorCode
from consultations.models.outcome import AccountOutcome, Error, Success
from consultations.repositories.account_repository import AccountRepository
from consultations.repositories.base_repository import (
    DuplicateRecordError,
    PersistenceError,
)
from consultations.services.base_service import BaseService

MSG_USER_EXISTS: str = "User with this email already exists"
MSG_CREATE_FAILED: str = "Could not create user"
MSG_WRONG_CREDENTIALS: str = "Wrong email or password"
MSG_STORAGE_FAILURE: str = "Something went wrong, please try again"


class AccountStore(BaseService):
    """Creates and verifies accounts.

    Parameters
    ----------
    repo:
        Record interface over the ``accounts`` table.
    logger:
        Structured logger.  Passwords are never logged.
    """

    def __init__(self, repo: AccountRepository, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._repo: AccountRepository = repo

    @staticmethod
    def normalize_email(email: str) -> str:
        """Strip surrounding whitespace and lowercase."""
        return email.strip().lower()

    def register(self, full_name: str, email: str, password: str) -> AccountOutcome:
        """Create an account for *email*.

        Returns
        -------
        Success
            Holding the new account as stored, with its generated id and
            ``created_at``.
        Error
            ``EMAIL_ALREADY_EXISTS`` when the normalised email is taken,
            ``CREATE_FAILED`` for any other storage failure.
        """
        normalized_email = self.normalize_email(email)
        candidate = Account(
            id=0,
            full_name=full_name.strip(),
            email=normalized_email,
            password=password,
        )

        try:
            new_id = self._repo.insert_unique(candidate)
        except DuplicateRecordError:
            self._logger.info("Registration rejected, email taken: %s", normalized_email)
            return Error(reason=MSG_USER_EXISTS, code=AccountErrorCode.EMAIL_ALREADY_EXISTS)
        except (PersistenceError, sqlite3.Error) as exc:
            self._logger.error("Registration failed for %s: %s", normalized_email, exc)
            return Error(reason=MSG_CREATE_FAILED, code=AccountErrorCode.CREATE_FAILED)

        if new_id is None or new_id <= 0:
            self._logger.error(
                "Insert for %s returned no usable id (%r).", normalized_email, new_id,
            )
            return Error(reason=MSG_CREATE_FAILED, code=AccountErrorCode.CREATE_FAILED)

        # Read the row back so the caller sees the stored created_at.
        try:
            stored = self._repo.get_by_id(new_id)
        except PersistenceError as exc:
            self._logger.warning("Could not read back account %d: %s", new_id, exc)
            stored = None
        account = stored if stored is not None else candidate.model_copy(update={"id": new_id})
        self._logger.info("Account registered: id=%d email=%s", new_id, normalized_email)
        return Success(value=account)

    def login(self, email: str, password: str) -> AccountOutcome:
        """Verify *email* and *password*.

        An unknown email and a wrong password produce the same ``Error``
        so the message does not reveal which one was wrong.
        """
        normalized_email = self.normalize_email(email)

        try:
            account = self._repo.find_one(normalized_email, password)
        except (PersistenceError, sqlite3.Error) as exc:
            self._logger.error("Login lookup failed for %s: %s", normalized_email, exc)
            return Error(reason=MSG_STORAGE_FAILURE, code=AccountErrorCode.STORAGE_FAILURE)

        if account is None:
            self._logger.info("Login rejected for %s.", normalized_email)
            return Error(
                reason=MSG_WRONG_CREDENTIALS, code=AccountErrorCode.INVALID_CREDENTIALS,
            )

        self._logger.info("Login succeeded: id=%d", account.id)
        return Success(value=account)
