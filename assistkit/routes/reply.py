"""Reply drafting routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from assistkit.errors import (
    ClipboardError,
    EmptySelectionError,
    ReplyNotReadyError,
    SelectionUnavailableError,
    UnknownVariantError,
)
from assistkit.models.variant import (
    CopyResult,
    RegenerateRequest,
    ReplySessionView,
    SlotStatus,
    SlotView,
    StartReplyRequest,
    VariantSpec,
)
from assistkit.services.clipboard import read_selected_text
from assistkit.services.coordinator import VariantCoordinator
from assistkit.services.reply_generator import (
    REPLY_VARIANTS,
    copy_original,
    copy_reply,
    get_session,
    start_session,
)

router = APIRouter(prefix="/reply")

PREVIEW_LENGTH = 100


def session_view(session: VariantCoordinator) -> ReplySessionView:
    text = session.source_text
    preview = text[:PREVIEW_LENGTH] + ("..." if len(text) > PREVIEW_LENGTH else "")
    slots = []
    for variant_id, slot in session.snapshot().items():
        slots.append(
            SlotView(
                variant_id=variant_id,
                title=session.spec(variant_id).title,
                status=slot.status,
                result=slot.result,
                error=slot.error,
                line_count=len(slot.result.split("\n")) if slot.status == SlotStatus.DONE and slot.result else None,
            )
        )
    return ReplySessionView(text=text, preview=preview, character_count=len(text), slots=slots)


def _current_session() -> VariantCoordinator:
    session = get_session()
    if session is None:
        raise HTTPException(status_code=404, detail="No reply session has been started.")
    return session


@router.get("/variants", response_model=list[VariantSpec])
async def list_variants() -> list[VariantSpec]:
    return list(REPLY_VARIANTS)


@router.post("/session", response_model=ReplySessionView)
async def start_reply_session(req: StartReplyRequest) -> ReplySessionView:
    """Start drafting all reply variants for the given (or selected) text."""
    if req.text is not None:
        text = req.text.strip()
        if not text:
            raise HTTPException(status_code=400, detail="No text selected")
    else:
        try:
            text = read_selected_text()
        except EmptySelectionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except SelectionUnavailableError as e:
            raise HTTPException(status_code=503, detail=str(e))

    return session_view(start_session(text))


@router.get("/session", response_model=ReplySessionView)
async def get_reply_session() -> ReplySessionView:
    return session_view(_current_session())


@router.post("/session/regenerate/{variant_id}", response_model=ReplySessionView)
async def regenerate_reply(variant_id: str, req: RegenerateRequest | None = None) -> ReplySessionView:
    """Discard one variant's reply and draft it again."""
    session = _current_session()
    force = req.force if req is not None else True
    try:
        session.regenerate(variant_id, force=force)
    except UnknownVariantError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return session_view(session)


@router.post("/session/copy/{variant_id}", response_model=CopyResult)
async def copy_reply_text(variant_id: str) -> CopyResult:
    """Copy a finished reply to the clipboard."""
    session = _current_session()
    try:
        return CopyResult(text=copy_reply(session, variant_id))
    except UnknownVariantError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ReplyNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ClipboardError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/session/copy-original", response_model=CopyResult)
async def copy_original_text() -> CopyResult:
    """Copy the text being replied to."""
    session = _current_session()
    try:
        return CopyResult(text=copy_original(session))
    except ClipboardError as e:
        raise HTTPException(status_code=503, detail=str(e))
