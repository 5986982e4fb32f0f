"""OCR result models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OcrResult(BaseModel):
    text: str
    confidence: float = Field(ge=0, le=1)
    language: str
