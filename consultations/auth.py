"""
Authentication Controller.

``AuthController`` owns the ``AuthState`` for one session.  The UI feeds it
intents (field edits, mode toggle, submit, logout) and re-renders from the
snapshots it publishes through :meth:`AuthController.subscribe`.

Submitting runs the account-store call on a worker thread and returns
straight away.  When the call finishes, the merge of its ``Outcome`` into
the state is handed to the injected *dispatch* callable, so a Tk UI can
pass ``lambda fn: root.after(0, fn)`` and have every state change happen on
the main loop.  Without a dispatcher the merge runs on the worker thread
under the controller lock.

Usage::

    controller = AuthController(store=store, logger=get_logger("consultations.auth"))
    controller.subscribe(render)
    controller.edit_field(AuthField.EMAIL, "ann@test.com")
    controller.edit_field(AuthField.PASSWORD, "abcdef")
    future = controller.submit()
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Optional, Union

from consultations.logger import StructuredLogger
from consultations.models.account import Account
from consultations.models.auth_models import AuthState, ValidationResult
from consultations.models.enums import AccountErrorCode, AuthField
from consultations.models.outcome import AccountOutcome, Error, Success
from consultations.services.account_store import MSG_STORAGE_FAILURE, AccountStore
from consultations.services.validation import CredentialValidator

MSG_LOGGED_OUT: str = "Logged out successfully"
_WELCOME_NEW: str = "Welcome, {}"
_WELCOME_BACK: str = "Welcome back, {}"

Dispatcher = Callable[[Callable[[], None]], None]
StateListener = Callable[[AuthState], None]


def _run_inline(fn: Callable[[], None]) -> None:
    fn()


class AuthController:
    """State machine behind the login / registration screen.

    Parameters
    ----------
    store:
        Account persistence boundary.  Only ``register`` and ``login``
        are used.
    logger:
        Structured logger.
    validator:
        Input rules; defaults to a 6-character minimum password.
    executor:
        Worker for store calls.  When omitted the controller creates a
        pool of *worker_threads* threads and shuts it down in :meth:`close`.
    worker_threads:
        Size of the pool the controller creates for itself.
    dispatch:
        Runs a completion callback on the state-owning context.
    discard_stale_outcomes:
        When ``True``, an outcome that arrives after ``logout()`` or a
        mode switch is dropped instead of applied.
    """

    def __init__(
        self,
        store: AccountStore,
        logger: StructuredLogger,
        validator: Optional[CredentialValidator] = None,
        executor: Optional[ThreadPoolExecutor] = None,
        dispatch: Optional[Dispatcher] = None,
        discard_stale_outcomes: bool = True,
        worker_threads: int = 1,
    ) -> None:
        self._store: AccountStore = store
        self._logger: StructuredLogger = logger
        self._validator: CredentialValidator = validator or CredentialValidator()
        self._owns_executor: bool = executor is None
        self._executor: ThreadPoolExecutor = executor or ThreadPoolExecutor(
            max_workers=worker_threads, thread_name_prefix="auth-worker",
        )
        self._dispatch: Dispatcher = dispatch or _run_inline
        self._discard_stale_outcomes: bool = discard_stale_outcomes

        self._lock: threading.RLock = threading.RLock()
        self._state: AuthState = AuthState()
        self._listeners: list[StateListener] = []
        self._generation: int = 0
        self._pending: Optional[Future[AccountOutcome]] = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> AuthState:
        """The current snapshot."""
        with self._lock:
            return self._state

    @property
    def pending(self) -> Optional[Future[AccountOutcome]]:
        """Future of the latest submit while it is still running."""
        with self._lock:
            if self._pending is not None and not self._pending.done():
                return self._pending
            return None

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* with every new snapshot.

        Returns a function that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def set_mode(self, is_register: bool) -> None:
        """Switch between the login and registration forms."""
        with self._lock:
            changes: dict[str, object] = {
                "is_register_mode": is_register,
                "message": None,
            }
            if is_register != self._state.is_register_mode:
                changes.update(self._abandon_pending())
            self._replace(**changes)

    def edit_field(self, field: Union[AuthField, str], value: str) -> None:
        """Store *value* in *field* and clear the message.

        Raises:
            ValueError: *field* is not an ``AuthField`` name.
        """
        name = AuthField(field)
        with self._lock:
            self._replace(**{name.value: value, "message": None})

    def submit(self) -> Optional[Future[AccountOutcome]]:
        """Validate the form and start a register or login call.

        Returns the future of the store call, or ``None`` when local
        validation failed (the message then says why).
        """
        with self._lock:
            state = self._state
            if state.is_register_mode:
                result: ValidationResult = self._validator.validate_registration(
                    state.full_name, state.email, state.password, state.confirm_password,
                )
                call: Callable[[], AccountOutcome] = partial(
                    self._store.register,
                    state.full_name.strip(),
                    state.email.strip(),
                    state.password,
                )
                welcome = _WELCOME_NEW
            else:
                result = self._validator.validate_login(state.email, state.password)
                call = partial(self._store.login, state.email.strip(), state.password)
                welcome = _WELCOME_BACK

            if not result.is_valid:
                self._replace(message=result.error_message)
                return None

            self._replace(is_loading=True, message=None)
            generation = self._generation
            future = self._executor.submit(self._run_call, call, welcome, generation)
            self._pending = future
            self._logger.debug(
                "Submitted %s (generation %d).",
                "registration" if state.is_register_mode else "login",
                generation,
            )
            return future

    def logout(self) -> None:
        """Sign out, keeping name and email so signing back in is quick."""
        with self._lock:
            changes: dict[str, object] = {
                "current_user": None,
                "password": "",
                "confirm_password": "",
                "message": MSG_LOGGED_OUT,
            }
            changes.update(self._abandon_pending())
            self._replace(**changes)
            self._logger.info("Session ended.")

    def close(self, wait: bool = True) -> None:
        """Release the worker and drop all listeners.

        Pass ``wait=False`` from a UI thread whose dispatcher needs the
        event loop; waiting there would block the very loop the in-flight
        calls are trying to reach.
        """
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
        with self._lock:
            self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _abandon_pending(self) -> dict[str, object]:
        """Start a new generation so outcomes already in flight go stale.

        Caller holds ``self._lock``.
        """
        if not self._discard_stale_outcomes:
            return {}
        self._generation += 1
        return {"is_loading": False}

    def _replace(self, **changes: object) -> None:
        """Swap in a new snapshot and notify listeners.

        Caller holds ``self._lock``; listeners are called under it so they
        see snapshots in order.
        """
        self._state = self._state.model_copy(update=changes)
        snapshot = self._state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self._logger.exception("State listener raised; continuing.")

    def _run_call(
        self,
        call: Callable[[], AccountOutcome],
        welcome: str,
        generation: int,
    ) -> AccountOutcome:
        """Worker thread: run the store call, then dispatch the merge."""
        try:
            outcome = call()
        except Exception:
            self._logger.exception("Account store raised instead of returning an outcome.")
            outcome = Error(reason=MSG_STORAGE_FAILURE, code=AccountErrorCode.STORAGE_FAILURE)

        try:
            self._dispatch(lambda: self._apply_outcome(outcome, welcome, generation))
        except Exception:
            self._logger.exception("Could not dispatch auth outcome to the UI context.")
        return outcome

    def _apply_outcome(
        self,
        outcome: AccountOutcome,
        welcome: str,
        generation: int,
    ) -> None:
        with self._lock:
            if self._discard_stale_outcomes and generation != self._generation:
                self._logger.info(
                    "Dropping outcome of superseded submit (generation %d, current %d).",
                    generation,
                    self._generation,
                )
                return

            if isinstance(outcome, Success):
                account = outcome.value
                self._replace(
                    is_loading=False,
                    current_user=account,
                    message=welcome.format(account.full_name),
                )
            else:
                self._replace(is_loading=False, message=outcome.reason)
