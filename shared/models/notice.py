"""Pydantic models for user-facing notices (the service's toast messages)."""

import uuid
from datetime import datetime
from typing import Callable, Literal

from pydantic import BaseModel, Field

NoticeLevel = Literal["info", "success", "error"]


class NoticeAction(BaseModel):
    """Labelled action offered with a notice. The callback never leaves the process."""

    label: str
    on_click: Callable[[], None] | None = Field(default=None, exclude=True)


class Notice(BaseModel):
    """A short-lived message for the user, optionally with one action."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    level: NoticeLevel = "info"
    message: str
    duration_ms: int = 5000
    action: NoticeAction | None = None
    created: datetime = Field(default_factory=datetime.now)
