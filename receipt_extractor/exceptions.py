"""
Exceptions raised by the extraction engine.

Missing fields are never errors; only input that cannot describe a receipt
at all, and failures to persist user corrections, reach the caller.
"""


class ExtractionError(ValueError):
    """Base class for extraction failures."""


class EmptyInputError(ExtractionError):
    """The OCR step produced no usable text lines."""

    def __init__(self, message: str = "OCR produced no text lines to extract from"):
        super().__init__(message)


class OverrideStoreError(OSError):
    """A user correction could not be written to its override store."""
