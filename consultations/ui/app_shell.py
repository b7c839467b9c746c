"""Application Host Shell.

The top-level ``CTk`` window.  It owns the ``AuthController`` for the
session, listens to its snapshots, and swaps between ``AuthView`` (AUTH
phase) and ``HomeView`` (HOME phase).  The shell holds no business logic.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

import customtkinter as ctk

from consultations import __version__ as _APP_VERSION
from consultations.auth import AuthController
from consultations.config import AppConfig
from consultations.logger import StructuredLogger, get_logger
from consultations.models.auth_models import AuthState
from consultations.models.enums import AuthPhase
from consultations.services import ServiceContainer
from consultations.ui.auth_view import AuthView
from consultations.ui.home_view import HomeView
from consultations.ui.theme import (
    AUTH_WINDOW_HEIGHT,
    AUTH_WINDOW_WIDTH,
    HOME_WINDOW_HEIGHT,
    HOME_WINDOW_WIDTH,
)


class AppShell(ctk.CTk):
    """Main application window.

    Lifecycle
    ---------
    1. On boot: shows ``AuthView``.
    2. When a snapshot arrives with an account: replaces it with ``HomeView``.
    3. On logout: back to ``AuthView``, name and email still filled in.

    Store calls finish on the controller's worker thread; their results
    are posted back here with ``self.after(0, ...)`` so every state change
    and redraw happens on the Tk main loop.

    Parameters
    ----------
    config:
        Application configuration.
    services:
        Fully-wired service container.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        config: AppConfig,
        services: ServiceContainer,
        logger: StructuredLogger,
    ) -> None:
        super().__init__()

        self._config = config
        self._logger = logger
        self._phase: Optional[AuthPhase] = None
        self._view: Optional[Union[AuthView, HomeView]] = None

        self.title(f"{config.APP_TITLE} v{_APP_VERSION}")
        ctk.set_appearance_mode(config.APPEARANCE_MODE)
        ctk.set_default_color_theme("blue")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._controller = AuthController(
            store=services["account_store"],
            validator=services["credential_validator"],
            logger=get_logger("consultations.auth"),
            dispatch=self._dispatch_to_ui,
            discard_stale_outcomes=config.AUTH_DISCARD_STALE_OUTCOMES,
            worker_threads=config.AUTH_WORKER_THREADS,
        )
        self._unsubscribe: Callable[[], None] = self._controller.subscribe(self._render)
        self._render(self._controller.state)

    @property
    def controller(self) -> AuthController:
        return self._controller

    # ==================================================================
    # State → widgets
    # ==================================================================

    def _dispatch_to_ui(self, fn: Callable[[], None]) -> None:
        self.after(0, fn)

    def _render(self, state: AuthState) -> None:
        if state.phase != self._phase:
            self._switch_phase(state.phase)
        if self._view is not None:
            self._view.render(state)

    def _switch_phase(self, phase: AuthPhase) -> None:
        if self._view is not None:
            self._view.destroy()
            self._view = None

        if phase == AuthPhase.HOME:
            self.geometry(f"{HOME_WINDOW_WIDTH}x{HOME_WINDOW_HEIGHT}")
            self.minsize(640, 420)
            self._view = HomeView(parent=self, controller=self._controller, logger=self._logger)
        else:
            self.geometry(f"{AUTH_WINDOW_WIDTH}x{AUTH_WINDOW_HEIGHT}")
            self.minsize(AUTH_WINDOW_WIDTH, AUTH_WINDOW_HEIGHT)
            self._view = AuthView(parent=self, controller=self._controller, logger=self._logger)

        self._view.pack(fill="both", expand=True)
        self._phase = phase
        self._logger.info("Showing %s screen.", phase)

    # ==================================================================
    # Shutdown
    # ==================================================================

    def _on_close(self) -> None:
        """Stop listening, release the auth worker, destroy the window."""
        self._logger.info("Window closing; shutting down.")
        self._unsubscribe()
        self._controller.close(wait=False)
        self.destroy()
