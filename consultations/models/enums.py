"""
Shared Enumerations.

StrEnum values compare equal to their string equivalents, so
``edit_field("email", ...)`` and ``edit_field(AuthField.EMAIL, ...)``
behave the same.
"""

from __future__ import annotations
from enum import StrEnum


class AuthField(StrEnum):
    """Text fields the user can edit on the authentication screen.

    ``FULL_NAME`` and ``CONFIRM_PASSWORD`` only matter in register mode;
    login ignores them.
    """

    FULL_NAME = "full_name"
    EMAIL = "email"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirm_password"


class AuthPhase(StrEnum):
    """Which top-level screen the UI shows."""

    AUTH = "AUTH"
    HOME = "HOME"


class AccountErrorCode(StrEnum):
    """Categories of a failed ``AccountStore`` call."""

    EMAIL_ALREADY_EXISTS = "email_already_exists"
    CREATE_FAILED = "create_failed"
    INVALID_CREDENTIALS = "invalid_credentials"
    STORAGE_FAILURE = "storage_failure"
    UNKNOWN_ERROR = "unknown_error"
