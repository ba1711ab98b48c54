"""Console rendering for streamed transcript entries.

Two formats are supported:

- ``"text"`` -- one ``[timestamp] speaker: text`` line per entry.
- ``"json"`` -- one compact JSON object per line (JSON Lines).

:func:`format_entry` returns the rendered line; :func:`print_entry` writes it
to stdout immediately so entries appear while the stream is still arriving.
"""

from __future__ import annotations

import sys
from typing import Literal, TextIO

from transcript_stream.models.entry import TranscriptEntry
from transcript_stream.models.result import TranscriptStreamResult

OutputFormat = Literal["text", "json"]

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json")


def format_entry(entry: TranscriptEntry, output_format: OutputFormat = "text") -> str:
    """Render one entry as a single line (without a trailing newline).

    Multi-line ``text`` values are kept on one line in ``"text"`` format by
    replacing newlines with spaces.

    Args:
        entry: The entry to render.
        output_format: ``"text"`` or ``"json"``.

    Returns:
        The rendered line.

    Raises:
        ValueError: If *output_format* is not a supported format.
    """
    if output_format == "json":
        return entry.model_dump_json()
    if output_format == "text":
        text = " ".join(entry.text.splitlines())
        return f"[{entry.timestamp}] {entry.speaker}: {text}"
    raise ValueError(f"Unsupported output format: {output_format!r}")


def print_entry(
    entry: TranscriptEntry,
    output_format: OutputFormat = "text",
    stream: TextIO | None = None,
) -> None:
    """Write one rendered entry and flush, so it shows up immediately."""
    out = stream if stream is not None else sys.stdout
    out.write(format_entry(entry, output_format) + "\n")
    out.flush()


def format_summary(result: TranscriptStreamResult) -> str:
    """Render a one-line summary of a consumed stream.

    Args:
        result: The stream result to summarise.

    Returns:
        e.g. ``"transcript.json: 12 entries, 2 speakers, 1 discarded, complete"``.
    """
    status = "complete" if result.complete else "incomplete"
    return (
        f"{result.source}: {len(result.entries)} entries, "
        f"{len(result.speakers)} speakers, "
        f"{len(result.discarded)} discarded, {status}"
    )
