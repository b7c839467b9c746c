"""
Data Models Package.

Re-exports the models for short imports::

    from consultations.models import Account, AuthState, Success, Error
"""

from __future__ import annotations

from consultations.models.enums import AccountErrorCode, AuthField, AuthPhase
from consultations.models.account import Account
from consultations.models.outcome import AccountOutcome, Error, Success
from consultations.models.auth_models import AuthState, ValidationResult

__all__ = [
    "AccountErrorCode",
    "AuthField",
    "AuthPhase",
    "Account",
    "Error",
    "AccountOutcome",
    "Success",
    "AuthState",
    "ValidationResult",
]
