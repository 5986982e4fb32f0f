"""Notification (toast) models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class NotificationStyle(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    ANIMATED = "animated"


class Notification(BaseModel):
    style: NotificationStyle
    title: str
    message: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
