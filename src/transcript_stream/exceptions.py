"""Custom exceptions for transcript-stream.

The parser itself never raises for malformed input; these exceptions belong
to the caller-side helpers that drive it.
"""

from __future__ import annotations


class TranscriptStreamError(Exception):
    """Base class for transcript-stream errors."""


class BufferLimitExceeded(TranscriptStreamError):
    """Raised when the in-flight candidate grows past the configured cap.

    An array that never closes, or a single pathologically large object,
    would otherwise make the parser's carry grow without bound.  The stream
    helpers treat crossing the cap as a hard failure of the stream.

    Attributes:
        limit: The configured maximum carry length, in characters.
        size: The carry length that exceeded it.
    """

    def __init__(self, limit: int, size: int) -> None:
        super().__init__(
            f"In-flight transcript entry exceeds {limit} characters ({size} buffered)"
        )
        self.limit = limit
        self.size = size
