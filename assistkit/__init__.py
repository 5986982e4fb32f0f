"""assistkit: desktop helper sidecar (form autofill, reply drafting, screenshot OCR)."""

__version__ = "0.1.0"
