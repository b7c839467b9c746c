"""
Credential Validation.

Synchronous checks run before anything touches the account store.  Each
check stops at the first failing rule so the user only ever sees one
message.
"""

from __future__ import annotations

from consultations.models.auth_models import ValidationResult

MSG_FILL_ALL_FIELDS: str = "Please fill all fields"
MSG_PASSWORDS_DO_NOT_MATCH: str = "Passwords do not match"

_VALID: ValidationResult = ValidationResult(is_valid=True)


def _is_blank(value: str) -> bool:
    return not value.strip()


class CredentialValidator:
    """Registration and login input rules.

    Parameters
    ----------
    min_password_length:
        Shortest accepted password, counted on the raw (untrimmed) value.
    """

    def __init__(self, min_password_length: int = 6) -> None:
        self._min_password_length: int = min_password_length

    @property
    def min_password_length(self) -> int:
        return self._min_password_length

    def validate_registration(
        self,
        full_name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> ValidationResult:
        """Check, in order: all fields filled, password length, confirmation.

        The confirmation must match the password exactly, whitespace
        included.
        """
        if any(_is_blank(v) for v in (full_name, email, password, confirm_password)):
            return ValidationResult(is_valid=False, error_message=MSG_FILL_ALL_FIELDS)
        if len(password) < self._min_password_length:
            return ValidationResult(
                is_valid=False,
                error_message=(
                    f"Password must be at least {self._min_password_length} characters"
                ),
            )
        if password != confirm_password:
            return ValidationResult(
                is_valid=False, error_message=MSG_PASSWORDS_DO_NOT_MATCH,
            )
        return _VALID

    def validate_login(self, email: str, password: str) -> ValidationResult:
        """Email and password must both be non-blank."""
        if _is_blank(email) or _is_blank(password):
            return ValidationResult(is_valid=False, error_message=MSG_FILL_ALL_FIELDS)
        return _VALID
