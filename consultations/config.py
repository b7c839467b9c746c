"""
Application Configuration.

Pydantic Settings model for the Online Consultations client.
Values are read from environment variables and an optional ``.env``
file.  Inject an ``AppConfig`` instance wherever configuration is needed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Application ---
    APP_TITLE: str = "Online Consultations"
    APPEARANCE_MODE: Literal["light", "dark", "system"] = "light"

    # --- Local storage ---
    DATABASE_PATH: Path = Path("consultations_local.db")

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "consultations.log"
    LOG_MAX_BYTES: int = 2_097_152  # 2 MB
    LOG_BACKUP_COUNT: int = 3

    # --- Authentication ---
    MIN_PASSWORD_LENGTH: int = Field(default=6, ge=1)
    AUTH_WORKER_THREADS: int = Field(default=1, ge=1)
    # Drop outcomes of submits that were overtaken by logout or a mode switch.
    AUTH_DISCARD_STALE_OUTCOMES: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _warn_missing_env(self) -> "AppConfig":
        """Log a start-up warning when no ``.env`` file is present."""
        if not Path(".env").exists():
            logging.getLogger("consultations.config").warning(
                "No .env file found; configuration loaded from "
                "environment variables or defaults."
            )
        return self

    @property
    def log_level(self) -> int:
        """Numeric ``logging`` level for :attr:`LOG_LEVEL` (INFO if unknown)."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    Uses a check-lock-check pattern so the first initialisation is
    thread-safe without paying for the lock on every call.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration so the next ``get_config()`` reloads it."""
    global _config_instance
    with _config_lock:
        _config_instance = None
