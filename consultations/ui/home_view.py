"""Home View: shown once an account is signed in.

Greets the user and offers logout.  It shows the signed-in account only;
the app has no consultation listing or booking screen.
"""

from __future__ import annotations

import customtkinter as ctk

from consultations.auth import AuthController
from consultations.logger import StructuredLogger
from consultations.models.auth_models import AuthState
from consultations.ui.theme import (
    CARD_BORDER,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_SMALL,
    LOGOUT_HOVER,
    LOGOUT_PRIMARY,
    PADDING_LG,
    PADDING_MD,
    SUCCESS_TEXT,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)


class HomeView(ctk.CTkFrame):
    """Signed-in landing frame."""

    def __init__(
        self,
        parent: ctk.CTk,
        controller: AuthController,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._controller = controller
        self._logger = logger

        header = ctk.CTkFrame(
            self,
            fg_color=CONTENT_CARD_BG,
            corner_radius=CORNER_RADIUS,
            border_width=1,
            border_color=CARD_BORDER,
        )
        header.pack(fill="x", padx=PADDING_LG, pady=PADDING_LG)

        text_col = ctk.CTkFrame(header, fg_color="transparent")
        text_col.pack(side="left", fill="x", expand=True, padx=PADDING_LG, pady=PADDING_MD)

        self._greeting = ctk.CTkLabel(
            text_col, text="", font=FONT_HEADING, text_color=TEXT_PRIMARY, anchor="w",
        )
        self._greeting.pack(fill="x")
        self._email_label = ctk.CTkLabel(
            text_col, text="", font=FONT_BODY, text_color=TEXT_SECONDARY, anchor="w",
        )
        self._email_label.pack(fill="x")
        self._message_label = ctk.CTkLabel(
            text_col, text="", font=FONT_SMALL, text_color=SUCCESS_TEXT, anchor="w",
        )
        self._message_label.pack(fill="x")

        ctk.CTkButton(
            header,
            text="Log out",
            font=FONT_BUTTON,
            fg_color=LOGOUT_PRIMARY,
            hover_color=LOGOUT_HOVER,
            text_color=TEXT_LIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_logout,
        ).pack(side="right", padx=PADDING_LG, pady=PADDING_MD)

    def _handle_logout(self) -> None:
        # Deferred: logout replaces this frame, which must not happen
        # inside its own button callback.
        self.after(0, self._controller.logout)

    def render(self, state: AuthState) -> None:
        """Show the signed-in account from *state*."""
        user = state.current_user
        if user is None:
            return
        self._greeting.configure(text=user.full_name)
        member_since = (
            f"  ·  member since {user.created_at:%d %b %Y}" if user.created_at else ""
        )
        self._email_label.configure(text=f"{user.email}{member_since}")
        self._message_label.configure(text=state.message or "")
