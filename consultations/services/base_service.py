"""
Service base class.

Services take their collaborators through ``__init__``; the logger is the
one every service needs, so it lives here.
"""

from __future__ import annotations

from consultations.logger import StructuredLogger


class BaseService:
    """Holds the injected ``StructuredLogger`` as ``self._logger``."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
