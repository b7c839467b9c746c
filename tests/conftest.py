import io
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

import pytest

# Keep test runs from writing a log file into the working directory.
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "consultations-tests.log"))

from consultations.auth import AuthController
from consultations.database import DatabaseManager
from consultations.logger import StructuredLogger
from consultations.models.account import Account
from consultations.models.enums import AccountErrorCode
from consultations.models.outcome import AccountOutcome, Error, Success
from consultations.repositories.account_repository import AccountRepository
from consultations.schema import initialize_schema
from consultations.services.account_store import AccountStore


class FakeAccountStore:
    """Stand-in for ``AccountStore`` that records calls.

    Returns ``register_outcome`` / ``login_outcome``.  When ``gate`` is set
    to an ``Event`` each call blocks until the test releases it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[str, ...]]] = []
        self.register_outcome: AccountOutcome = Success(value=make_account())
        self.login_outcome: AccountOutcome = Success(value=make_account())
        self.gate: Optional[threading.Event] = None
        self.raise_on_call: Optional[Exception] = None

    def _wait(self) -> None:
        if self.gate is not None:
            assert self.gate.wait(timeout=5), "test never released the store gate"
        if self.raise_on_call is not None:
            raise self.raise_on_call

    def register(self, full_name: str, email: str, password: str) -> AccountOutcome:
        self.calls.append(("register", (full_name, email, password)))
        self._wait()
        return self.register_outcome

    def login(self, email: str, password: str) -> AccountOutcome:
        self.calls.append(("login", (email, password)))
        self._wait()
        return self.login_outcome


def make_account(
    account_id: int = 1,
    full_name: str = "Ann",
    email: str = "ann@test.com",
    password: str = "abcdef",
) -> Account:
    return Account(id=account_id, full_name=full_name, email=email, password=password)


def duplicate_error() -> Error:
    return Error(
        reason="User with this email already exists",
        code=AccountErrorCode.EMAIL_ALREADY_EXISTS,
    )


@pytest.fixture
def logger(request):
    return StructuredLogger(name=f"consultations.tests.{request.node.name}", stream=io.StringIO())


@pytest.fixture
def db(tmp_path: Path, logger):
    manager = DatabaseManager(sqlite_path=tmp_path / "test.db", logger=logger)
    initialize_schema(manager.sqlite, logger)
    yield manager
    manager.close()


@pytest.fixture
def repo(db, logger):
    return AccountRepository(db=db, logger=logger)


@pytest.fixture
def store(repo, logger):
    return AccountStore(repo=repo, logger=logger)


@pytest.fixture
def fake_store():
    return FakeAccountStore()


@pytest.fixture
def controller(fake_store, logger):
    ctrl = AuthController(store=fake_store, logger=logger)
    yield ctrl
    if fake_store.gate is not None:
        fake_store.gate.set()
    ctrl.close()


@pytest.fixture
def live_controller(store, logger):
    """Controller wired to the real SQLite-backed store."""
    ctrl = AuthController(store=store, logger=logger)
    yield ctrl
    ctrl.close()
