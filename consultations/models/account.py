"""
Account Model.

A persisted local user.  The normalised email is the identity; ``id`` is
the row id the store generated at creation time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Account(BaseModel):
    """Represents a registered account.

    ``password`` is kept verbatim (the app does no hashing) and is left
    out of ``repr()`` so it never ends up in a log line by accident.
    """

    id: int
    full_name: str
    email: str
    password: str = Field(repr=False)
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}
