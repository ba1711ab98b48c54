"""transcript-stream: incremental parsing of streamed JSON transcripts.

Turns a JSON array of ``{"timestamp", "speaker", "text"}`` objects that
arrives in arbitrary fragments into transcript entries, emitting each one
as soon as its closing brace is seen and skipping malformed elements.
"""

from __future__ import annotations

from transcript_stream.exceptions import BufferLimitExceeded, TranscriptStreamError
from transcript_stream.models.entry import TranscriptEntry
from transcript_stream.models.result import DiscardedCandidate, TranscriptStreamResult
from transcript_stream.parser import IncrementalTranscriptParser, parse_fragments
from transcript_stream.stream import (
    aiter_entries,
    collect_stream,
    iter_entries,
    parse_transcript_file,
    read_fragments,
)

__version__ = "0.1.0"

__all__ = [
    "BufferLimitExceeded",
    "DiscardedCandidate",
    "IncrementalTranscriptParser",
    "TranscriptEntry",
    "TranscriptStreamError",
    "TranscriptStreamResult",
    "aiter_entries",
    "collect_stream",
    "iter_entries",
    "parse_fragments",
    "parse_transcript_file",
    "read_fragments",
]
