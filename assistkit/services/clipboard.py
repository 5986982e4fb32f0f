"""Clipboard access."""

from __future__ import annotations

import logging

import pyperclip

from assistkit.errors import ClipboardError, EmptySelectionError, SelectionUnavailableError

logger = logging.getLogger(__name__)


def copy_text(text: str) -> None:
    """Copy text to the system clipboard."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.error(f"Clipboard write failed: {e}")
        raise ClipboardError("Could not copy to the clipboard") from e


def read_selected_text() -> str:
    """Return the current clipboard text, stripped.

    The launcher copies the user's selection before calling the sidecar, so
    the clipboard holds the selected text.
    """
    try:
        text = pyperclip.paste()
    except pyperclip.PyperclipException as e:
        logger.error(f"Clipboard read failed: {e}")
        raise SelectionUnavailableError("Could not retrieve selected text") from e

    text = (text or "").strip()
    if not text:
        raise EmptySelectionError("No text selected")
    return text
