"""Result and diagnostic types for streamed transcript parsing.

These dataclasses describe what happened to a stream as a whole.  They are
plain stdlib dataclasses; only the entries themselves are Pydantic models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from transcript_stream.models.entry import TranscriptEntry


@dataclass(frozen=True)
class DiscardedCandidate:
    """Text dropped by the parser without producing an entry.

    Attributes:
        text: The candidate object text, or the stray text that preceded
            the next object.
        reason: Human-readable description of why it was dropped.
    """

    text: str
    reason: str


@dataclass(frozen=True)
class TranscriptStreamResult:
    """Top-level return type when a whole stream has been consumed.

    Attributes:
        entries: Parsed entries, in the order they completed.
        speakers: Unique speaker labels, ordered by first appearance.
        discarded: Candidates and stray text dropped along the way.
        source: File path of the parsed transcript, or ``"<stream>"``.
        complete: ``True`` if the closing ``]`` of the array was seen.
    """

    entries: list[TranscriptEntry] = field(default_factory=list)
    speakers: list[str] = field(default_factory=list)
    discarded: list[DiscardedCandidate] = field(default_factory=list)
    source: str = "<stream>"
    complete: bool = False
