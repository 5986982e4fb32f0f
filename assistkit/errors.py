"""Exception types shared by the services and routes."""

from __future__ import annotations


class AssistkitError(Exception):
    """Base class for errors raised by assistkit services."""


class AIUnavailableError(AssistkitError):
    """No API key is configured, so the AI service cannot be reached."""


class GenerationError(AssistkitError):
    """A text generation call failed (network, auth, or malformed response)."""


class UnknownVariantError(AssistkitError, KeyError):
    """A variant id outside the configured variant set was requested."""

    def __init__(self, variant_id: str):
        super().__init__(variant_id)
        self.variant_id = variant_id

    def __str__(self) -> str:
        return f"Unknown variant: {self.variant_id}"


class EmptySelectionError(AssistkitError):
    """The selected text was empty."""


class SelectionUnavailableError(AssistkitError):
    """The selected text could not be read."""


class OcrError(AssistkitError):
    """The OCR request failed or returned nothing usable."""


class CaptureCancelledError(AssistkitError):
    """The user dismissed the screen capture without selecting a region."""


class NoTextFoundError(OcrError):
    """The OCR call succeeded but the image contained no text."""


class ReplyNotReadyError(AssistkitError):
    """A reply was requested before its variant finished generating."""


class ClipboardError(AssistkitError):
    """The system clipboard could not be written."""
