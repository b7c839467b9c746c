"""
Structured JSON Logging.

``StructuredLogger`` wraps a ``logging.Logger`` that writes one JSON object
per record to stdout and to a rotating log file.  Components receive a
logger through their constructor instead of calling ``logging`` directly.

Passwords never go into a log call.  Emails are logged in their normalised
form only.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

_RecordField = Union[str, dict[str, str]]


def _builtin_record_keys() -> frozenset[str]:
    blank = logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
    )
    # ``message``/``asctime`` appear after formatting, ``taskName`` on 3.12+.
    return frozenset(blank.__dict__) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """Render a ``LogRecord`` as a single-line JSON object.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``logger_name``,
    ``message``, plus ``extra`` for caller-supplied context and
    ``exception`` when a traceback is attached.
    """

    _STANDARD_ATTRS: frozenset[str] = _builtin_record_keys()

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, _RecordField] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: str(value)
            for key, value in vars(record).items()
            if key not in self._STANDARD_ATTRS
        }
        if context:
            entry["extra"] = context

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry["exception"] = record.exc_text

        return json.dumps(entry, ensure_ascii=False)


def _open_log_file(path: Path, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


class StructuredLogger:
    """Injectable logger.

    Usage::

        log = StructuredLogger(name="consultations.auth")
        log.info("Account created", extra={"account_id": "7"})

    Unset arguments fall back to ``AppConfig`` (``LOG_LEVEL``, ``LOG_FILE``,
    ``LOG_MAX_BYTES``, ``LOG_BACKUP_COUNT``).  Handlers are attached the
    first time a name is seen; later instances for the same name reuse them.
    """

    def __init__(
        self,
        name: str = "consultations",
        level: Optional[int] = None,
        stream: Optional[TextIO] = None,
        log_file: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        # Imported here: config logs through ``logging`` while it loads.
        from consultations.config import get_config
        cfg = get_config()

        threshold: int = cfg.log_level if level is None else level
        self._logger: logging.Logger = logging.getLogger(name)
        self._logger.setLevel(threshold)
        if self._logger.handlers:
            return

        formatter = JSONFormatter()
        handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]

        target = Path(log_file or cfg.LOG_FILE)
        try:
            handlers.append(_open_log_file(
                target,
                cfg.LOG_MAX_BYTES if max_bytes is None else max_bytes,
                cfg.LOG_BACKUP_COUNT if backup_count is None else backup_count,
            ))
        except OSError as exc:
            file_error: Optional[OSError] = exc
        else:
            file_error = None

        for handler in handlers:
            handler.setLevel(threshold)
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

        if file_error is not None:
            self._logger.warning(
                "Log file %s is not writable (%s); logging to the console only.",
                target,
                file_error,
            )

    @property
    def logger(self) -> logging.Logger:
        """The wrapped ``logging.Logger``."""
        return self._logger

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: object, **kwargs: object) -> None:
        """Log at ERROR with the active exception's traceback."""
        self._logger.exception(msg, *args, **kwargs)

    def critical(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.critical(msg, *args, **kwargs)


def get_logger(name: str = "consultations") -> StructuredLogger:
    """``StructuredLogger`` for *name* using the configured defaults."""
    return StructuredLogger(name=name)
