"""Data models for transcript-stream."""

from __future__ import annotations

from transcript_stream.models.entry import TranscriptEntry
from transcript_stream.models.result import DiscardedCandidate, TranscriptStreamResult

__all__ = [
    "DiscardedCandidate",
    "TranscriptEntry",
    "TranscriptStreamResult",
]
