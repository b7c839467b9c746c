"""Auth View: Sign In / Create Account Screen.

**Thin UI Rule**: this module holds no business logic.  Every keystroke
and click becomes an ``AuthController`` intent, and the widgets are
redrawn from the ``AuthState`` snapshot passed to :meth:`AuthView.render`.
"""

from __future__ import annotations

import tkinter as tk
from typing import Optional

import customtkinter as ctk

from consultations.auth import MSG_LOGGED_OUT, AuthController
from consultations.logger import StructuredLogger
from consultations.models.auth_models import AuthState
from consultations.models.enums import AuthField
from consultations.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    CARD_BORDER,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_LABEL,
    FONT_SMALL,
    FONT_SUBTITLE,
    FONT_TAB,
    FONT_TAB_ACTIVE,
    INPUT_BG,
    INPUT_BORDER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    SUCCESS_TEXT,
    TAB_HOVER,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_CARD_WIDTH: int = 400
_TAB_HEIGHT: int = 40
_INPUT_HEIGHT: int = 42
_BUTTON_HEIGHT: int = 46

_FIELD_LABELS: dict[AuthField, str] = {
    AuthField.FULL_NAME: "FULL NAME",
    AuthField.EMAIL: "EMAIL ADDRESS",
    AuthField.PASSWORD: "PASSWORD",
    AuthField.CONFIRM_PASSWORD: "CONFIRM PASSWORD",
}
_SECRET_FIELDS: frozenset[AuthField] = frozenset(
    {AuthField.PASSWORD, AuthField.CONFIRM_PASSWORD}
)
_REGISTER_ONLY: frozenset[AuthField] = frozenset(
    {AuthField.FULL_NAME, AuthField.CONFIRM_PASSWORD}
)


class AuthView(ctk.CTkFrame):
    """Login / registration form bound to an ``AuthController``.

    Parameters
    ----------
    parent:
        Window this frame lives in.
    controller:
        Receives the intents raised by the form.
    logger:
        Structured logger.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        controller: AuthController,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)

        self._controller: AuthController = controller
        self._logger: StructuredLogger = logger

        # Set while render() writes into the entry variables, so the
        # variable traces do not echo the change back as an edit.
        self._syncing: bool = False

        self._vars: dict[AuthField, tk.StringVar] = {}
        self._rows: dict[AuthField, ctk.CTkFrame] = {}
        self._sign_in_tab: Optional[ctk.CTkButton] = None
        self._register_tab: Optional[ctk.CTkButton] = None
        self._submit_button: Optional[ctk.CTkButton] = None
        self._message_label: Optional[ctk.CTkLabel] = None
        self._form: Optional[ctk.CTkFrame] = None
        self._shown_register_mode: Optional[bool] = None

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(
            self,
            width=_CARD_WIDTH,
            fg_color=CONTENT_CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color=CARD_BORDER,
        )
        card.grid(row=1, column=0)

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        ctk.CTkLabel(
            inner, text="Online Consultations", font=FONT_BRAND, text_color=TEXT_PRIMARY,
        ).pack(pady=(0, 2))
        ctk.CTkLabel(
            inner,
            text="Book time with a specialist",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_LG))

        tab_bar = ctk.CTkFrame(inner, fg_color="transparent", height=_TAB_HEIGHT)
        tab_bar.pack(fill="x", pady=(0, PADDING_MD))
        tab_bar.pack_propagate(False)
        tab_bar.grid_columnconfigure(0, weight=1)
        tab_bar.grid_columnconfigure(1, weight=1)

        self._sign_in_tab = self._make_tab(tab_bar, "Sign In", is_register=False)
        self._sign_in_tab.grid(row=0, column=0, sticky="nsew")
        self._register_tab = self._make_tab(tab_bar, "Create Account", is_register=True)
        self._register_tab.grid(row=0, column=1, sticky="nsew")

        self._form = ctk.CTkFrame(inner, fg_color="transparent")
        self._form.pack(fill="x")
        for field in AuthField:
            self._rows[field] = self._build_field_row(self._form, field)

        self._submit_button = ctk.CTkButton(
            inner,
            text="",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=_BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_submit,
        )
        self._submit_button.pack(fill="x", pady=(PADDING_SM, PADDING_SM))

        self._message_label = ctk.CTkLabel(
            inner,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            wraplength=_CARD_WIDTH - 80,
        )
        self._message_label.pack(fill="x")

    def _make_tab(self, parent: ctk.CTkFrame, text: str, is_register: bool) -> ctk.CTkButton:
        return ctk.CTkButton(
            parent,
            text=text,
            font=FONT_TAB,
            fg_color="transparent",
            hover_color=TAB_HOVER,
            text_color=TEXT_SECONDARY,
            height=_TAB_HEIGHT,
            corner_radius=0,
            border_width=1,
            border_color=INPUT_BORDER,
            command=lambda: self._controller.set_mode(is_register),
        )

    def _build_field_row(self, parent: ctk.CTkFrame, field: AuthField) -> ctk.CTkFrame:
        """Label + entry for *field*, wired to ``edit_field`` via a trace."""
        row = ctk.CTkFrame(parent, fg_color="transparent")

        ctk.CTkLabel(
            row, text=_FIELD_LABELS[field], font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))

        var = tk.StringVar(master=self, value="")
        var.trace_add("write", lambda *_: self._on_field_changed(field))
        self._vars[field] = var

        entry = ctk.CTkEntry(
            row,
            textvariable=var,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            show="*" if field in _SECRET_FIELDS else "",
            height=_INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        entry.pack(fill="x", pady=(0, PADDING_MD))
        entry.bind("<Return>", self._on_enter_key)
        return row

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _on_field_changed(self, field: AuthField) -> None:
        if self._syncing:
            return
        self._controller.edit_field(field, self._vars[field].get())

    def _on_enter_key(self, event: tk.Event[tk.Misc]) -> None:
        self._handle_submit()

    def _handle_submit(self) -> None:
        if not self._controller.state.can_submit:
            return
        self._controller.submit()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, state: AuthState) -> None:
        """Redraw the form from *state*."""
        self._syncing = True
        try:
            for field, var in self._vars.items():
                value = getattr(state, field.value)
                if var.get() != value:
                    var.set(value)
        finally:
            self._syncing = False

        if state.is_register_mode != self._shown_register_mode:
            for field in AuthField:
                self._rows[field].pack_forget()
            for field in AuthField:
                if state.is_register_mode or field not in _REGISTER_ONLY:
                    self._rows[field].pack(fill="x")
            self._shown_register_mode = state.is_register_mode

        self._style_tab(self._register_tab, active=state.is_register_mode)
        self._style_tab(self._sign_in_tab, active=not state.is_register_mode)

        if state.is_loading:
            label = "Creating account..." if state.is_register_mode else "Signing in..."
            self._submit_button.configure(text=label, state="disabled")
        else:
            label = "Create Account  →" if state.is_register_mode else "Sign In  →"
            self._submit_button.configure(text=label, state="normal")

        color = SUCCESS_TEXT if state.message == MSG_LOGGED_OUT else ERROR_TEXT
        self._message_label.configure(text=state.message or "", text_color=color)

    @staticmethod
    def _style_tab(tab: Optional[ctk.CTkButton], active: bool) -> None:
        if tab is None:
            return
        tab.configure(
            text_color=ACCENT_PRIMARY if active else TEXT_SECONDARY,
            border_color=ACCENT_PRIMARY if active else INPUT_BORDER,
            border_width=2 if active else 1,
            font=FONT_TAB_ACTIVE if active else FONT_TAB,
        )
