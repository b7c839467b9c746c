"""
Authentication Models.

``AuthState`` is the one snapshot the UI renders from.  It is frozen:
``AuthController`` builds a new instance for every transition with
``model_copy(update=...)`` and never mutates one in place.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from consultations.models.account import Account
from consultations.models.enums import AuthPhase


class ValidationResult(BaseModel):
    """Result of a synchronous input check.

    Attributes
    ----------
    is_valid:
        ``True`` when the input passes every rule.
    error_message:
        Message for the first rule that failed, or ``None``.
    """

    is_valid: bool
    error_message: Optional[str] = None

    model_config = {"frozen": True}


class AuthState(BaseModel):
    """Snapshot of the authentication screen and session.

    Attributes
    ----------
    is_register_mode:
        ``True`` for the registration form, ``False`` for login.
    full_name, email, password, confirm_password:
        Raw field contents as typed.  ``full_name`` and
        ``confirm_password`` are ignored in login mode.
    current_user:
        The authenticated account, or ``None``.
    message:
        Advisory or error text for the user; cleared by most edits.
    is_loading:
        ``True`` while a submit is waiting on the account store.
    """

    is_register_mode: bool = False
    full_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    current_user: Optional[Account] = None
    message: Optional[str] = None
    is_loading: bool = False

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def phase(self) -> AuthPhase:
        """``HOME`` once an account is signed in, ``AUTH`` otherwise."""
        return AuthPhase.HOME if self.current_user is not None else AuthPhase.AUTH

    @property
    def can_submit(self) -> bool:
        """The UI disables the submit button while this is ``False``."""
        return not self.is_loading
