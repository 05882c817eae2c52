"""Bubble Babble error types."""
from __future__ import annotations


class BubbleBabbleError(ValueError):
    """Base class. ``code`` indexes the error table in ``bubble_verify.const``."""

    code = "E_BUBBLE"


class MalformedInput(BubbleBabbleError):
    """Structurally invalid encoded string, hex digest or manifest line."""

    code = "E_MALFORMED_INPUT"

    def __init__(self, message: str, lineno: int | None = None, line: str | None = None):
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno
        self.line = line


class ChecksumMismatch(BubbleBabbleError):
    """Decoded data failed the embedded checksum."""

    code = "E_CHECKSUM_MISMATCH"
