"""Reply variant and generation slot models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class VariantSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    prompt_modifier: str
    title: str
    description: str = ""
    expected_length: str = ""


class SlotStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class GenerationSlot(BaseModel):
    status: SlotStatus = SlotStatus.IDLE
    result: str | None = None
    error: str | None = None
    # Incremented for every call issued for this slot; completions carrying an
    # older epoch are stale.
    epoch: int = 0


class SlotView(BaseModel):
    variant_id: str
    title: str
    status: SlotStatus
    result: str | None = None
    error: str | None = None
    line_count: int | None = None


class StartReplyRequest(BaseModel):
    text: str | None = None


class RegenerateRequest(BaseModel):
    force: bool = True


class ReplySessionView(BaseModel):
    text: str
    preview: str
    character_count: int
    slots: list[SlotView]


class CopyResult(BaseModel):
    text: str
