"""
Services Package.

The ``create_services()`` factory wires repositories and services
together and returns a typed dict, so the entry point and the UI never
build the dependency graph themselves.
"""

from __future__ import annotations

from typing import TypedDict

from consultations.config import AppConfig
from consultations.database import DatabaseManager
from consultations.logger import get_logger
from consultations.repositories.account_repository import AccountRepository
from consultations.services.account_store import AccountStore
from consultations.services.validation import CredentialValidator


class ServiceContainer(TypedDict):
    """Typed container for the application services."""

    account_repository: AccountRepository
    account_store: AccountStore
    credential_validator: CredentialValidator


def create_services(db: DatabaseManager, config: AppConfig) -> ServiceContainer:
    """Wire all repositories and services together.

    Args:
        db: Open database manager with the schema initialised.
        config: Application configuration.

    Returns:
        ServiceContainer mapping service names to wired instances.
    """
    account_repository = AccountRepository(
        db=db, logger=get_logger("consultations.repositories"),
    )
    account_store = AccountStore(
        repo=account_repository, logger=get_logger("consultations.account_store"),
    )
    credential_validator = CredentialValidator(
        min_password_length=config.MIN_PASSWORD_LENGTH,
    )

    return ServiceContainer(
        account_repository=account_repository,
        account_store=account_store,
        credential_validator=credential_validator,
    )
