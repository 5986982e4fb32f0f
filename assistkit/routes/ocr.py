"""Screenshot OCR routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from assistkit.errors import AIUnavailableError, CaptureCancelledError, ClipboardError, NoTextFoundError, OcrError
from assistkit.models.ocr import OcrResult
from assistkit.services.ocr import capture_to_clipboard

router = APIRouter(prefix="/ocr")


@router.post("/capture", response_model=OcrResult)
async def capture() -> OcrResult:
    """Capture a screen region, extract its text, and copy it to the clipboard."""
    try:
        return await capture_to_clipboard()
    except (AIUnavailableError, ClipboardError) as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CaptureCancelledError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoTextFoundError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OcrError as e:
        raise HTTPException(status_code=502, detail=str(e))
