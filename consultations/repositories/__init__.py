"""
Repository Package.

Data-access layer over the local SQLite database.
"""

from consultations.repositories.base_repository import (
    BaseRepository,
    DuplicateRecordError,
    PersistenceError,
)
from consultations.repositories.account_repository import AccountRepository

__all__ = [
    "BaseRepository",
    "DuplicateRecordError",
    "PersistenceError",
    "AccountRepository",
]
