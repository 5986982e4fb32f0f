"""Form autofill data models."""

from __future__ import annotations

from pydantic import BaseModel


class FormEntry(BaseModel):
    id: int
    company_name: str
    name: str
    email: str
    address: str
    phone: str | None = None
    comment: str | None = None


class ApplyFormRequest(BaseModel):
    open_browser: bool = True


class ApplyFormResult(BaseModel):
    entry_id: int
    url: str
    opened: bool
