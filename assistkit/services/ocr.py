"""Screenshot OCR: capture a screen region and extract its text with Claude."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import re
import subprocess
import tempfile
from pathlib import Path

from pydantic import ValidationError

from assistkit.errors import AIUnavailableError, CaptureCancelledError, NoTextFoundError, OcrError
from assistkit.models.ocr import OcrResult
from assistkit.services.claude_client import get_claude_client
from assistkit.services.clipboard import copy_text
from assistkit.services.notifier import get_notifier

logger = logging.getLogger(__name__)

TEMP_IMAGE_NAME = "assistkit_ocr_temp.png"

OCR_INSTRUCTION = (
    "Extract all text in this image exactly. Preserve the layout and structure of the text "
    "as far as possible and recognize Japanese, English, and any other language correctly. "
    'Always answer in JSON: {"text": "extracted text", "confidence": 0.95, "language": "English"}'
)

# Confidence reported when the model answers without (valid) JSON.
RAW_TEXT_CONFIDENCE = 0.9
UNPARSED_JSON_CONFIDENCE = 0.8
UNKNOWN_LANGUAGE = "unknown"

_JSON_BLOCK = re.compile(r"\{.*\}", re.DOTALL)


def capture_screenshot(path: Path) -> Path:
    """Let the user select a screen region and save it to ``path``.

    Uses macOS ``screencapture -i``; pressing Escape leaves no file behind.
    """
    try:
        subprocess.run(
            ["screencapture", "-i", str(path)],
            check=True,
            capture_output=True,
        )
    except FileNotFoundError as e:
        raise OcrError("screencapture is not available on this system") from e
    except subprocess.CalledProcessError as e:
        raise OcrError(f"Screen capture failed: {e.stderr.decode(errors='replace')}") from e

    if not path.exists() or path.stat().st_size == 0:
        raise CaptureCancelledError("Screenshot capture was cancelled")
    return path


def encode_image(path: Path) -> str:
    try:
        return base64.b64encode(path.read_bytes()).decode("ascii")
    except OSError as e:
        raise OcrError(f"Failed to encode image: {e}") from e


def parse_ocr_response(content: str) -> OcrResult:
    """Turn the model's answer into an OcrResult.

    Falls back to the raw answer as text when no valid JSON object is found.
    """
    match = _JSON_BLOCK.search(content)
    if not match:
        return OcrResult(text=content, confidence=RAW_TEXT_CONFIDENCE, language=UNKNOWN_LANGUAGE)

    try:
        return OcrResult.model_validate(json.loads(match.group()))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"JSON parsing failed, using raw text: {e}")
        return OcrResult(text=content, confidence=UNPARSED_JSON_CONFIDENCE, language=UNKNOWN_LANGUAGE)


async def perform_ocr(image_path: Path) -> OcrResult:
    """Extract the text of an image with the vision model."""
    claude = get_claude_client()
    if not claude:
        raise AIUnavailableError("Anthropic API key is not configured.")

    image_data = encode_image(image_path)
    logger.debug(f"Image encoded, base64 length: {len(image_data)}")

    try:
        content = await claude.read_image(image_data, OCR_INSTRUCTION)
    except Exception as e:
        raise OcrError(f"OCR processing failed: {e}") from e

    if not content:
        raise OcrError("No response received from the AI service")

    logger.debug(f"Raw OCR response: {content[:500]}")
    return parse_ocr_response(content)


def cleanup_temp_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Temporary file cleanup failed: {e}")


async def capture_to_clipboard(temp_dir: Path | None = None) -> OcrResult:
    """Capture a region, OCR it, and copy the text to the clipboard."""
    notifier = get_notifier()
    if get_claude_client() is None:
        notifier.failure("Error", "Anthropic API key is not configured. Set it in the assistkit config.")
        raise AIUnavailableError("Anthropic API key is not configured.")

    image_path = Path(temp_dir or tempfile.gettempdir()) / TEMP_IMAGE_NAME
    try:
        notifier.progress("Capturing screenshot...")
        # screencapture -i waits on the user, so keep it off the event loop.
        await asyncio.to_thread(capture_screenshot, image_path)
        logger.info(f"Screenshot captured at: {image_path}")

        notifier.progress("Running AI OCR...")
        result = await perform_ocr(image_path)
        if not result.text.strip():
            raise NoTextFoundError("No text could be extracted from the image")

        copy_text(result.text)
        notifier.success(
            "OCR complete",
            f"Copied text to the clipboard (confidence: {round(result.confidence * 100)}%)",
        )
        return result
    except Exception as e:
        logger.error(f"OCR failed: {e}")
        notifier.failure("OCR failed", str(e) or "An unknown error occurred")
        raise
    finally:
        cleanup_temp_file(image_path)
