"""Pydantic model for a single streamed transcript entry.

Each element of the streamed JSON array is validated against
:class:`TranscriptEntry`.  Validation is strict: all three fields must be
present and must already be JSON strings.  Numbers, ``null`` and booleans
are rejected rather than coerced, and extra keys are dropped.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TranscriptEntry(BaseModel):
    """A single speaker turn emitted by the incremental parser.

    Attributes:
        timestamp: Time label as produced upstream (e.g. ``"01:05"``).
            Not interpreted; any string, including ``""``, is accepted.
        speaker: Speaker label (e.g. ``"Researcher"``).
        text: Free-text content of the turn.
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    timestamp: str
    speaker: str
    text: str
