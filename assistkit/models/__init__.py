"""Pydantic data models for the assistkit API."""

from assistkit.models.form import ApplyFormRequest, ApplyFormResult, FormEntry
from assistkit.models.notification import Notification, NotificationStyle
from assistkit.models.ocr import OcrResult
from assistkit.models.variant import (
    CopyResult,
    GenerationSlot,
    RegenerateRequest,
    ReplySessionView,
    SlotStatus,
    SlotView,
    StartReplyRequest,
    VariantSpec,
)

__all__ = [
    "ApplyFormRequest",
    "ApplyFormResult",
    "CopyResult",
    "FormEntry",
    "GenerationSlot",
    "Notification",
    "NotificationStyle",
    "OcrResult",
    "RegenerateRequest",
    "ReplySessionView",
    "SlotStatus",
    "SlotView",
    "StartReplyRequest",
    "VariantSpec",
]
