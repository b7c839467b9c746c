import threading

import pytest

from consultations.auth import AuthController
from consultations.models.auth_models import AuthState
from consultations.models.enums import AccountErrorCode, AuthField, AuthPhase
from consultations.models.outcome import Error, Success
from consultations.services.validation import CredentialValidator
from tests.conftest import duplicate_error, make_account


def fill_register_form(
    controller: AuthController,
    full_name: str = "Ann",
    email: str = " Ann@Test.com ",
    password: str = "abcdef",
    confirm_password: str = "abcdef",
) -> None:
    controller.set_mode(True)
    controller.edit_field(AuthField.FULL_NAME, full_name)
    controller.edit_field(AuthField.EMAIL, email)
    controller.edit_field(AuthField.PASSWORD, password)
    controller.edit_field(AuthField.CONFIRM_PASSWORD, confirm_password)


def fill_login_form(controller: AuthController, email: str = "ann@test.com", password: str = "abcdef") -> None:
    controller.set_mode(False)
    controller.edit_field(AuthField.EMAIL, email)
    controller.edit_field(AuthField.PASSWORD, password)


class TestSynchronousIntents:

    def test_initial_state(self, controller):
        state = controller.state

        assert state == AuthState()
        assert state.phase == AuthPhase.AUTH
        assert not state.is_loading
        assert controller.pending is None

    def test_set_mode_clears_message(self, controller):
        controller.submit()  # empty form -> validation message
        assert controller.state.message == "Please fill all fields"

        controller.set_mode(True)

        assert controller.state.is_register_mode
        assert controller.state.message is None

    def test_edit_field_updates_value_and_clears_message(self, controller):
        controller.submit()

        controller.edit_field(AuthField.EMAIL, "ann@test.com")

        assert controller.state.email == "ann@test.com"
        assert controller.state.message is None

    def test_edit_field_accepts_string_names(self, controller):
        controller.edit_field("confirm_password", "abc")

        assert controller.state.confirm_password == "abc"

    def test_edit_field_rejects_unknown_field(self, controller):
        with pytest.raises(ValueError):
            controller.edit_field("nickname", "annie")

    def test_each_intent_publishes_a_new_snapshot(self, controller):
        before = controller.state

        controller.edit_field(AuthField.FULL_NAME, "Ann")

        assert controller.state is not before
        assert before.full_name == ""


class TestRegisterValidation:

    @pytest.mark.parametrize(
        "blank_field", list(AuthField),
    )
    def test_blank_field_rejected(self, controller, fake_store, blank_field):
        fill_register_form(controller)
        controller.edit_field(blank_field, "   ")

        assert controller.submit() is None

        assert controller.state.message == "Please fill all fields"
        assert not controller.state.is_loading
        assert fake_store.calls == []

    def test_short_password_never_reaches_store(self, controller, fake_store):
        fill_register_form(controller, password="abcde", confirm_password="abcde")

        assert controller.submit() is None

        assert controller.state.message == "Password must be at least 6 characters"
        assert not controller.state.is_loading
        assert controller.state.current_user is None
        assert fake_store.calls == []

    def test_mismatched_confirmation_never_reaches_store(self, controller, fake_store):
        fill_register_form(controller, password="abcdef", confirm_password="abcdeg")

        controller.submit()

        assert controller.state.message == "Passwords do not match"
        assert fake_store.calls == []

    def test_confirmation_compared_untrimmed(self, controller, fake_store):
        fill_register_form(controller, password="abcdef", confirm_password="abcdef ")

        controller.submit()

        assert controller.state.message == "Passwords do not match"
        assert fake_store.calls == []

    def test_length_checked_before_match(self, controller):
        fill_register_form(controller, password="abc", confirm_password="xyz")

        controller.submit()

        assert controller.state.message == "Password must be at least 6 characters"

    def test_configured_minimum_length(self, fake_store, logger):
        ctrl = AuthController(
            store=fake_store, logger=logger, validator=CredentialValidator(min_password_length=8),
        )
        try:
            fill_register_form(ctrl, password="abcdefg", confirm_password="abcdefg")
            ctrl.submit()
            assert ctrl.state.message == "Password must be at least 8 characters"
        finally:
            ctrl.close()


class TestRegisterSubmit:

    def test_success_signs_in(self, controller, fake_store):
        fill_register_form(controller)

        future = controller.submit()
        outcome = future.result(timeout=5)

        assert isinstance(outcome, Success)
        assert fake_store.calls == [("register", ("Ann", "Ann@Test.com", "abcdef"))]
        state = controller.state
        assert state.current_user == make_account()
        assert state.message == "Welcome, Ann"
        assert not state.is_loading
        assert state.phase == AuthPhase.HOME

    def test_error_keeps_user_signed_out(self, controller, fake_store):
        fake_store.register_outcome = duplicate_error()
        fill_register_form(controller)

        controller.submit().result(timeout=5)

        state = controller.state
        assert state.current_user is None
        assert state.message == "User with this email already exists"
        assert not state.is_loading

    def test_loading_while_pending(self, controller, fake_store):
        fake_store.gate = threading.Event()
        fill_register_form(controller)

        future = controller.submit()

        assert controller.state.is_loading
        assert controller.state.message is None
        assert not controller.state.can_submit
        assert controller.pending is future

        fake_store.gate.set()
        future.result(timeout=5)

        assert not controller.state.is_loading
        assert controller.pending is None

    def test_unexpected_store_exception_becomes_message(self, controller, fake_store):
        fake_store.raise_on_call = RuntimeError("boom")
        fill_register_form(controller)

        outcome = controller.submit().result(timeout=5)

        assert isinstance(outcome, Error)
        assert outcome.code == AccountErrorCode.STORAGE_FAILURE
        assert controller.state.message == "Something went wrong, please try again"
        assert not controller.state.is_loading


class TestLoginSubmit:

    @pytest.mark.parametrize("email,password", [("", "abcdef"), ("ann@test.com", ""), ("  ", "  ")])
    def test_blank_credentials_rejected(self, controller, fake_store, email, password):
        fill_login_form(controller, email=email, password=password)

        assert controller.submit() is None

        assert controller.state.message == "Please fill all fields"
        assert fake_store.calls == []

    def test_login_ignores_register_only_fields(self, controller, fake_store):
        fill_login_form(controller)

        controller.submit().result(timeout=5)

        assert fake_store.calls == [("login", ("ann@test.com", "abcdef"))]

    def test_login_trims_email_but_not_password(self, controller, fake_store):
        fill_login_form(controller, email="  ann@test.com ", password=" abcdef ")

        controller.submit().result(timeout=5)

        assert fake_store.calls == [("login", ("ann@test.com", " abcdef "))]

    def test_success_welcomes_back(self, controller):
        fill_login_form(controller)

        controller.submit().result(timeout=5)

        assert controller.state.current_user == make_account()
        assert controller.state.message == "Welcome back, Ann"

    def test_error_sets_message(self, controller, fake_store):
        fake_store.login_outcome = Error(
            reason="Wrong email or password", code=AccountErrorCode.INVALID_CREDENTIALS,
        )
        fill_login_form(controller)

        controller.submit().result(timeout=5)

        assert controller.state.current_user is None
        assert controller.state.message == "Wrong email or password"
        assert not controller.state.is_loading


class TestLogout:

    def test_logout_clears_credentials_keeps_identity_fields(self, controller):
        fill_register_form(controller, full_name="Ann", email="ann@test.com")
        controller.submit().result(timeout=5)
        assert controller.state.is_authenticated

        controller.logout()

        state = controller.state
        assert state.current_user is None
        assert state.password == ""
        assert state.confirm_password == ""
        assert state.message == "Logged out successfully"
        assert state.full_name == "Ann"
        assert state.email == "ann@test.com"
        assert state.phase == AuthPhase.AUTH


class TestStaleOutcomes:

    def test_outcome_after_logout_is_dropped(self, controller, fake_store):
        fake_store.gate = threading.Event()
        fill_login_form(controller)
        future = controller.submit()

        controller.logout()
        assert not controller.state.is_loading

        fake_store.gate.set()
        future.result(timeout=5)

        assert controller.state.current_user is None
        assert controller.state.message == "Logged out successfully"

    def test_outcome_after_mode_switch_is_dropped(self, controller, fake_store):
        fake_store.gate = threading.Event()
        fill_register_form(controller)
        future = controller.submit()

        controller.set_mode(False)

        fake_store.gate.set()
        future.result(timeout=5)

        assert controller.state.current_user is None
        assert controller.state.message is None
        assert not controller.state.is_loading

    def test_same_mode_does_not_abandon_submit(self, controller, fake_store):
        fake_store.gate = threading.Event()
        fill_login_form(controller)
        future = controller.submit()

        controller.set_mode(False)
        assert controller.state.is_loading

        fake_store.gate.set()
        future.result(timeout=5)

        assert controller.state.is_authenticated

    def test_outcome_applied_when_discarding_disabled(self, fake_store, logger):
        fake_store.gate = threading.Event()
        ctrl = AuthController(store=fake_store, logger=logger, discard_stale_outcomes=False)
        try:
            fill_login_form(ctrl)
            future = ctrl.submit()
            ctrl.logout()
            assert ctrl.state.is_loading

            fake_store.gate.set()
            future.result(timeout=5)

            assert ctrl.state.current_user == make_account()
            assert ctrl.state.message == "Welcome back, Ann"
            assert not ctrl.state.is_loading
        finally:
            fake_store.gate.set()
            ctrl.close()


class TestObservers:

    def test_listener_receives_every_snapshot(self, controller):
        seen: list[AuthState] = []
        controller.subscribe(seen.append)

        fill_login_form(controller)
        controller.submit().result(timeout=5)

        assert [s.is_loading for s in seen[-2:]] == [True, False]
        assert seen[-1] == controller.state

    def test_unsubscribe_stops_notifications(self, controller):
        seen: list[AuthState] = []
        unsubscribe = controller.subscribe(seen.append)

        controller.edit_field(AuthField.EMAIL, "a")
        unsubscribe()
        controller.edit_field(AuthField.EMAIL, "ab")

        assert len(seen) == 1

    def test_failing_listener_does_not_block_others(self, controller):
        seen: list[AuthState] = []

        def broken(state: AuthState) -> None:
            raise RuntimeError("render failed")

        controller.subscribe(broken)
        controller.subscribe(seen.append)

        controller.edit_field(AuthField.EMAIL, "a")

        assert controller.state.email == "a"
        assert len(seen) == 1


class TestDispatcher:

    def test_outcome_merged_through_dispatcher(self, fake_store, logger):
        queued = []
        ctrl = AuthController(store=fake_store, logger=logger, dispatch=queued.append)
        try:
            fill_login_form(ctrl)
            ctrl.submit().result(timeout=5)

            assert ctrl.state.is_loading
            assert len(queued) == 1

            queued.pop()()

            assert not ctrl.state.is_loading
            assert ctrl.state.is_authenticated
        finally:
            ctrl.close()

    def test_dispatch_failure_is_contained(self, fake_store, logger):
        def dead_ui(fn):
            raise RuntimeError("main thread is not in main loop")

        ctrl = AuthController(store=fake_store, logger=logger, dispatch=dead_ui)
        try:
            fill_login_form(ctrl)
            outcome = ctrl.submit().result(timeout=5)
            assert isinstance(outcome, Success)
        finally:
            ctrl.close()


class TestEndToEnd:

    def test_register_logout_login_round_trip(self, live_controller):
        fill_register_form(live_controller, full_name="Ann", email=" Ann@Test.com ")
        live_controller.submit().result(timeout=5)
        registered = live_controller.state.current_user
        assert registered is not None
        assert registered.email == "ann@test.com"

        live_controller.logout()
        fill_login_form(live_controller, email="ann@test.com", password="abcdef")
        live_controller.submit().result(timeout=5)

        assert live_controller.state.current_user.id == registered.id
        assert live_controller.state.message == "Welcome back, Ann"

    def test_duplicate_registration_reported(self, live_controller):
        fill_register_form(live_controller, email="a@x.com")
        live_controller.submit().result(timeout=5)
        live_controller.logout()

        fill_register_form(live_controller, full_name="Other", email="A@X.com ")
        live_controller.submit().result(timeout=5)

        assert live_controller.state.current_user is None
        assert live_controller.state.message == "User with this email already exists"
