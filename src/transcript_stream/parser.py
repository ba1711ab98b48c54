"""Incremental parser for a streamed JSON array of transcript entries.

Upstream services stream a transcript as a JSON array of the form::

    [{"timestamp": "00:00", "speaker": "Researcher", "text": "..."}, ...]

The text arrives in fragments of arbitrary size, so a fragment may end in
the middle of a key, an escape sequence, a brace or the array delimiter.
:class:`IncrementalTranscriptParser` scans each fragment one character at a
time, keeping just enough lexical state between calls to recognise the
closing brace of every top-level object, and returns each
:class:`~transcript_stream.models.entry.TranscriptEntry` as soon as that
brace arrives.

Malformed elements are dropped without raising: an object that is not
valid JSON, or that lacks a string ``timestamp``, ``speaker`` or ``text``,
is discarded, and stray text between objects is thrown away when the next
object opens.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable

from pydantic import ValidationError

from transcript_stream.models.entry import TranscriptEntry
from transcript_stream.models.result import DiscardedCandidate

logger = logging.getLogger(__name__)

DiscardCallback = Callable[[DiscardedCandidate], None]

_SEPARATORS = ", \t\r\n"

# Longest candidate excerpt written to the log on discard.
_LOG_PREVIEW_CHARS = 200


class IncrementalTranscriptParser:
    """Stateful parser that turns text fragments into transcript entries.

    One instance serves exactly one stream.  It performs no I/O and holds
    no resources; drop it when the stream ends.  Calls to :meth:`feed`
    must be made in stream order and must not overlap.

    Args:
        on_discard: Optional callback invoked with a
            :class:`~transcript_stream.models.result.DiscardedCandidate`
            each time a candidate object or stray text is dropped.
            Exceptions raised by the callback propagate out of
            :meth:`feed`.
    """

    def __init__(self, on_discard: DiscardCallback | None = None) -> None:
        self._on_discard = on_discard

        self._array_entered = False
        self._closed = False
        self._in_string = False
        self._escape = False
        self._depth = 0
        self._current: list[str] = []
        self._carry = ""

        self._entry_count = 0
        self._discarded_count = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def carry(self) -> str:
        """Text of the in-flight candidate retained since the last call."""
        return self._carry

    @property
    def array_entered(self) -> bool:
        """Whether the opening ``[`` of the array has been seen."""
        return self._array_entered

    @property
    def closed(self) -> bool:
        """Whether the closing ``]`` of the array has been seen."""
        return self._closed

    @property
    def entry_count(self) -> int:
        """Number of entries emitted so far."""
        return self._entry_count

    @property
    def discarded_count(self) -> int:
        """Number of candidates and stray text runs dropped so far."""
        return self._discarded_count

    def feed(self, fragment: str) -> list[TranscriptEntry]:
        """Consume the next fragment of the stream.

        Every character of *fragment* is examined exactly once.  Text before
        the opening ``[`` is ignored, and once the closing ``]`` has been
        seen all further input is ignored.

        Args:
            fragment: The next contiguous slice of the stream text.  May be
                empty.

        Returns:
            Entries completed by this fragment, in the order their closing
            braces appeared.  Entries returned by earlier calls are never
            repeated.
        """
        if self._closed:
            if fragment:
                logger.debug("Ignoring %d char(s) after end of array", len(fragment))
            return []

        out: list[TranscriptEntry] = []

        for ch in fragment:
            if not self._array_entered:
                if ch == "[":
                    self._array_entered = True
                continue

            if self._in_string:
                self._current.append(ch)
                if self._escape:
                    self._escape = False
                elif ch == "\\":
                    self._escape = True
                elif ch == '"':
                    self._in_string = False
                continue

            if self._depth == 0:
                if ch == "]":
                    self._drop_prefix()
                    self._closed = True
                    logger.debug("End of array after %d entry(ies)", self._entry_count)
                    break
                if ch == "{":
                    # Resynchronise: anything before this brace is not part
                    # of an object.
                    self._drop_prefix()
                    self._depth = 1
                    self._current.append(ch)
                    continue
                if not self._current and ch in _SEPARATORS:
                    continue
                self._current.append(ch)
                if ch == '"':
                    self._in_string = True
                continue

            self._current.append(ch)
            if ch == '"':
                self._in_string = True
            elif ch == "{":
                self._depth += 1
            elif ch == "}":
                self._depth -= 1
                if self._depth == 0:
                    entry = self._complete_candidate()
                    if entry is not None:
                        out.append(entry)

        self._carry = "".join(self._current)
        return out

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _complete_candidate(self) -> TranscriptEntry | None:
        """Parse and validate the accumulated object text.

        The accumulator is cleared whatever the outcome.

        Returns:
            The validated entry, or ``None`` if the candidate was dropped.
        """
        raw = "".join(self._current)
        self._current = []

        candidate = raw.strip()
        if candidate.endswith(","):
            candidate = candidate[:-1]

        try:
            data = json.loads(candidate)
        except ValueError as exc:
            self._discard(raw, f"Invalid JSON: {exc}")
            return None
        except RecursionError:
            self._discard(raw, "Invalid JSON: nested too deeply to decode")
            return None

        try:
            entry = TranscriptEntry.model_validate(data)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "<root>"
                for err in exc.errors()
            )
            self._discard(raw, f"Missing or non-string field(s): {fields}")
            return None

        self._entry_count += 1
        logger.debug(
            "Parsed entry %d: [%s] %s",
            self._entry_count,
            entry.timestamp,
            entry.speaker,
        )
        return entry

    def _drop_prefix(self) -> None:
        """Discard text accumulated outside any object."""
        if not self._current:
            return
        text = "".join(self._current).strip(_SEPARATORS)
        self._current = []
        if text:
            self._discard(text, "Stray text between entries")

    def _discard(self, text: str, reason: str) -> None:
        self._discarded_count += 1
        preview = text
        if len(preview) > _LOG_PREVIEW_CHARS:
            preview = preview[:_LOG_PREVIEW_CHARS] + "..."
        logger.warning(
            "Discarding candidate (%s, %d chars): %r", reason, len(text), preview
        )
        if self._on_discard is not None:
            self._on_discard(DiscardedCandidate(text=text, reason=reason))


def parse_fragments(fragments: Iterable[str]) -> list[TranscriptEntry]:
    """Parse a finite sequence of fragments in one go.

    Equivalent to feeding each fragment to a fresh
    :class:`IncrementalTranscriptParser` in order and concatenating the
    results.

    Args:
        fragments: The stream text, split at arbitrary points.

    Returns:
        All entries found, in stream order.
    """
    parser = IncrementalTranscriptParser()
    entries: list[TranscriptEntry] = []
    for fragment in fragments:
        entries.extend(parser.feed(fragment))
    return entries
