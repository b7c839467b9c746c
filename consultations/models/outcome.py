"""
Persistence Outcomes.

``AccountStore`` never raises across its boundary; every call resolves to
one of two variants::

    outcome = store.login(email, password)
    if isinstance(outcome, Success):
        show_home(outcome.value)
    else:
        show_message(outcome.reason)
"""

from __future__ import annotations

from typing import Generic, TypeVar, Union

from pydantic import BaseModel

from consultations.models.account import Account
from consultations.models.enums import AccountErrorCode

T = TypeVar("T")


class Success(BaseModel, Generic[T]):
    """The operation completed and produced *value*."""

    value: T

    model_config = {"frozen": True}

    @property
    def is_success(self) -> bool:
        return True


class Error(BaseModel):
    """The operation failed.

    Attributes
    ----------
    reason:
        Human-readable message, shown to the user as-is.
    code:
        Failure category for callers that need to branch on it.
    """

    reason: str
    code: AccountErrorCode = AccountErrorCode.UNKNOWN_ERROR

    model_config = {"frozen": True}

    @property
    def is_success(self) -> bool:
        return False


# Concrete alias: pydantic collapses ``Success[T]`` back to ``Success`` for
# its own TypeVar, so a generic ``Union[Success[T], Error]`` is not
# subscriptable.
AccountOutcome = Union[Success[Account], Error]
