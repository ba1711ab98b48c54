"""Helpers that drive the incremental parser from a fragment source.

:class:`~transcript_stream.parser.IncrementalTranscriptParser` never limits
how much text it buffers.  The helpers here add that limit on the caller
side: when ``max_buffer_chars`` is set and the parser's carry grows past
it, :class:`~transcript_stream.exceptions.BufferLimitExceeded` is raised
and the stream is abandoned.

- :func:`iter_entries` / :func:`aiter_entries` -- yield entries from a
  synchronous or asynchronous iterable of text fragments.
- :func:`read_fragments` -- split a file into fixed-size fragments.
- :func:`collect_stream` / :func:`parse_transcript_file` -- consume a
  whole stream into a
  :class:`~transcript_stream.models.result.TranscriptStreamResult`.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from pathlib import Path

from transcript_stream.config import DEFAULT_FRAGMENT_SIZE
from transcript_stream.exceptions import BufferLimitExceeded
from transcript_stream.models.entry import TranscriptEntry
from transcript_stream.models.result import DiscardedCandidate, TranscriptStreamResult
from transcript_stream.parser import DiscardCallback, IncrementalTranscriptParser

logger = logging.getLogger(__name__)


def _check_buffer(parser: IncrementalTranscriptParser, max_buffer_chars: int | None) -> None:
    """Raise if the parser's carry exceeds *max_buffer_chars*."""
    if max_buffer_chars is None:
        return
    size = len(parser.carry)
    if size > max_buffer_chars:
        logger.error(
            "Abandoning stream: in-flight entry is %d chars (limit %d)",
            size,
            max_buffer_chars,
        )
        raise BufferLimitExceeded(limit=max_buffer_chars, size=size)


def iter_entries(
    fragments: Iterable[str],
    *,
    max_buffer_chars: int | None = None,
    on_discard: DiscardCallback | None = None,
) -> Iterator[TranscriptEntry]:
    """Yield entries as *fragments* are consumed.

    Each entry is yielded as soon as the fragment completing it has been
    fed, so a consumer sees it before the next fragment is pulled.

    Args:
        fragments: Text fragments in stream order.
        max_buffer_chars: Optional cap on the parser's carry, checked after
            every fragment.
        on_discard: Optional discard callback passed to the parser.

    Yields:
        Parsed :class:`TranscriptEntry` instances in stream order.

    Raises:
        BufferLimitExceeded: If the carry grows past *max_buffer_chars*.
    """
    parser = IncrementalTranscriptParser(on_discard=on_discard)
    for fragment in fragments:
        yield from parser.feed(fragment)
        _check_buffer(parser, max_buffer_chars)


async def aiter_entries(
    fragments: AsyncIterable[str],
    *,
    max_buffer_chars: int | None = None,
    on_discard: DiscardCallback | None = None,
) -> AsyncIterator[TranscriptEntry]:
    """Asynchronous counterpart of :func:`iter_entries`.

    Only the fragment source is awaited; parsing each fragment is
    synchronous.

    Raises:
        BufferLimitExceeded: If the carry grows past *max_buffer_chars*.
    """
    parser = IncrementalTranscriptParser(on_discard=on_discard)
    async for fragment in fragments:
        for entry in parser.feed(fragment):
            yield entry
        _check_buffer(parser, max_buffer_chars)


def read_fragments(
    file_path: str | Path,
    fragment_size: int = DEFAULT_FRAGMENT_SIZE,
) -> Iterator[str]:
    """Read a UTF-8 text file in fragments of at most *fragment_size* chars.

    Args:
        file_path: Path to the file.
        fragment_size: Maximum number of characters per fragment.

    Yields:
        Consecutive slices of the file's text.

    Raises:
        ValueError: If *fragment_size* is not positive.
    """
    if fragment_size <= 0:
        raise ValueError(f"fragment_size must be positive, got {fragment_size}")

    with open(file_path, encoding="utf-8", newline="") as f:
        while True:
            fragment = f.read(fragment_size)
            if not fragment:
                return
            yield fragment


def collect_stream(
    fragments: Iterable[str],
    *,
    source: str = "<stream>",
    max_buffer_chars: int | None = None,
    on_entry: Callable[[TranscriptEntry], None] | None = None,
) -> TranscriptStreamResult:
    """Consume a whole fragment stream and summarise it.

    Args:
        fragments: Text fragments in stream order.
        source: Label for the stream origin (e.g. a file path).
        max_buffer_chars: Optional cap on the parser's carry.
        on_entry: Optional callback invoked with each entry as soon as it
            completes, before the next fragment is read.

    Returns:
        A :class:`TranscriptStreamResult` with every entry, the speakers in
        order of first appearance, and every discarded candidate.

    Raises:
        BufferLimitExceeded: If the carry grows past *max_buffer_chars*.
    """
    discarded: list[DiscardedCandidate] = []
    parser = IncrementalTranscriptParser(on_discard=discarded.append)
    entries: list[TranscriptEntry] = []

    for fragment in fragments:
        for entry in parser.feed(fragment):
            entries.append(entry)
            if on_entry is not None:
                on_entry(entry)
        _check_buffer(parser, max_buffer_chars)

    if not parser.closed:
        logger.warning(
            "Stream %s ended before the array was closed (%d char(s) pending)",
            source,
            len(parser.carry),
        )

    speakers = list(dict.fromkeys(e.speaker for e in entries))
    logger.info(
        "Parsed %d entry(ies) from %d speaker(s) in %s; %d discarded",
        len(entries),
        len(speakers),
        source,
        len(discarded),
    )

    return TranscriptStreamResult(
        entries=entries,
        speakers=speakers,
        discarded=discarded,
        source=source,
        complete=parser.closed,
    )


def parse_transcript_file(
    file_path: str | Path,
    *,
    fragment_size: int = DEFAULT_FRAGMENT_SIZE,
    max_buffer_chars: int | None = None,
) -> TranscriptStreamResult:
    """Parse a JSON transcript file by replaying it through the parser.

    Args:
        file_path: Path to the transcript file.  Accepts both :class:`str`
            and :class:`~pathlib.Path`.
        fragment_size: Characters fed to the parser per call.
        max_buffer_chars: Optional cap on the parser's carry.

    Returns:
        A :class:`TranscriptStreamResult` with ``source`` set to the string
        representation of *file_path*.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        BufferLimitExceeded: If the carry grows past *max_buffer_chars*.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript file not found: {path}")

    return collect_stream(
        read_fragments(path, fragment_size),
        source=str(path),
        max_buffer_chars=max_buffer_chars,
    )
