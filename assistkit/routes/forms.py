"""Form autofill routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from assistkit.models.form import ApplyFormRequest, ApplyFormResult, FormEntry
from assistkit.services.form_filler import FormEntriesError, apply_form, find_entry, load_entries

router = APIRouter(prefix="/forms")


def _entries() -> list[FormEntry]:
    try:
        return load_entries()
    except FormEntriesError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/entries", response_model=list[FormEntry])
async def list_entries() -> list[FormEntry]:
    return _entries()


@router.post("/apply/{entry_id}", response_model=ApplyFormResult)
async def apply_entry(entry_id: int, req: ApplyFormRequest | None = None) -> ApplyFormResult:
    """Open the form prefilled with a saved entry."""
    entry = find_entry(entry_id, _entries())
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Form entry not found: {entry_id}")
    return apply_form(entry, open_browser=req.open_browser if req is not None else True)
