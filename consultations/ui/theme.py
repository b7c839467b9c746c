"""UI Theme Constants.

Colour, font, and sizing constants for the CustomTkinter interface.

This file contains **zero logic**, only ``Final`` constants.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

CONTENT_BG: Final[str] = "#eef2f7"
CONTENT_CARD_BG: Final[str] = "#ffffff"
CARD_BORDER: Final[str] = "#dde3ea"

ACCENT_PRIMARY: Final[str] = "#1f7a8c"
ACCENT_HOVER: Final[str] = "#176170"
TEXT_PRIMARY: Final[str] = "#102a43"
TEXT_SECONDARY: Final[str] = "#627d98"
TEXT_LIGHT: Final[str] = "#ffffff"

INPUT_BG: Final[str] = "#ffffff"
INPUT_BORDER: Final[str] = "#bcccdc"
ERROR_TEXT: Final[str] = "#d64545"
SUCCESS_TEXT: Final[str] = "#27ae60"

TAB_HOVER: Final[str] = "#f0f4f8"
LOGOUT_PRIMARY: Final[str] = "#e74c3c"
LOGOUT_HOVER: Final[str] = "#c0392b"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------

FONT_FAMILY: Final[str] = "Segoe UI"
FONT_BRAND: Final[tuple[str, int, str]] = (FONT_FAMILY, 22, "bold")
FONT_HEADING: Final[tuple[str, int, str]] = (FONT_FAMILY, 20, "bold")
FONT_SUBTITLE: Final[tuple[str, int]] = (FONT_FAMILY, 12)
FONT_BODY: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_LABEL: Final[tuple[str, int, str]] = (FONT_FAMILY, 11, "bold")
FONT_SMALL: Final[tuple[str, int]] = (FONT_FAMILY, 11)
FONT_TAB: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_TAB_ACTIVE: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")
FONT_BUTTON: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

AUTH_WINDOW_WIDTH: Final[int] = 480
AUTH_WINDOW_HEIGHT: Final[int] = 720
HOME_WINDOW_WIDTH: Final[int] = 900
HOME_WINDOW_HEIGHT: Final[int] = 600
CORNER_RADIUS: Final[int] = 8
PADDING_SM: Final[int] = 8
PADDING_MD: Final[int] = 16
PADDING_LG: Final[int] = 24
