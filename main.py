"""
Online Consultations Desktop Application Entry Point.

Builds the dependency graph by constructor injection, initialises the
local SQLite schema, and launches the CustomTkinter GUI.

Usage::

    python main.py
"""

from __future__ import annotations

import atexit
import sys
import traceback

from consultations.config import get_config
from consultations.database import DatabaseManager
from consultations.logger import StructuredLogger, get_logger
from consultations.schema import initialize_schema
from consultations.services import create_services
from consultations.ui.app_shell import AppShell


def main() -> None:
    """Application entry point: wire dependencies and launch the GUI."""
    logger: StructuredLogger = get_logger("consultations.main")
    logger.info("Starting Online Consultations...")

    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables)
    # ------------------------------------------------------------------
    config = get_config()

    # ------------------------------------------------------------------
    # 2. Local database + schema
    # ------------------------------------------------------------------
    db = DatabaseManager(
        sqlite_path=config.DATABASE_PATH,
        logger=get_logger("consultations.database"),
    )
    # close() is idempotent; this covers exits that skip the finally below.
    atexit.register(db.close)
    initialize_schema(db.sqlite, get_logger("consultations.schema"))

    # ------------------------------------------------------------------
    # 3. Services (repositories + account store)
    # ------------------------------------------------------------------
    services = create_services(db=db, config=config)

    # ------------------------------------------------------------------
    # 4. GUI (blocks until the window closes)
    # ------------------------------------------------------------------
    logger.info("Launching GUI...")
    app = AppShell(config=config, services=services, logger=get_logger("consultations.ui"))
    try:
        app.mainloop()
    finally:
        db.close()
        logger.info("Online Consultations shut down.")


def _show_fatal_error(exc: BaseException) -> None:
    """Show a fatal-error dialog, or write to stderr when Tk is unusable."""
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        import tkinter
        from tkinter import messagebox

        root = tkinter.Tk()
        root.withdraw()
        messagebox.showerror(
            title="Online Consultations: Fatal Error",
            message=(
                "The application encountered an unexpected error and "
                "cannot continue.\n\n"
                f"{type(exc).__name__}: {exc}"
            ),
            detail=detail,
        )
        root.destroy()
    except Exception:
        sys.stderr.write(f"FATAL: {type(exc).__name__}: {exc}\n{detail}")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        _show_fatal_error(exc)
        sys.exit(1)
