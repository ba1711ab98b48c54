"""Entry point for ``python -m transcript_stream``.

Replays a JSON transcript (a file, or ``-`` for stdin) through the
incremental parser in fixed-size fragments and prints each entry as soon
as it completes.  Uses stdlib :mod:`argparse` for argument parsing.

Entries go to stdout; logs and the final summary go to stderr.

Exit codes:
    0 -- The stream was consumed (including streams with discards).
    1 -- An error occurred (file not found, unreadable, config error,
         buffer limit exceeded).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from functools import partial
from pathlib import Path

from transcript_stream.config import ConfigError, load_settings
from transcript_stream.display import OUTPUT_FORMATS, format_summary, print_entry
from transcript_stream.exceptions import BufferLimitExceeded
from transcript_stream.log import setup_logging
from transcript_stream.stream import collect_stream, read_fragments


def _positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="transcript-stream",
        description=(
            "Replay a streamed JSON transcript through the incremental "
            "parser and print entries as they complete."
        ),
    )
    parser.add_argument(
        "transcript_file",
        type=str,
        help="Path to the JSON transcript file, or '-' to read stdin.",
    )
    parser.add_argument(
        "--fragment-size",
        type=_positive_int,
        default=None,
        help="Characters fed to the parser per call (defaults to FRAGMENT_SIZE).",
    )
    parser.add_argument(
        "--max-buffer-chars",
        type=_positive_int,
        default=None,
        help=(
            "Abandon the stream if one in-flight entry exceeds this many "
            "characters (defaults to MAX_BUFFER_CHARS, or no limit)."
        ),
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        dest="output_format",
        help="Output format for entries (default: text).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def _stdin_fragments(fragment_size: int) -> Iterator[str]:
    """Yield stdin text in fragments of at most *fragment_size* chars."""
    yield from iter(partial(sys.stdin.read, fragment_size), "")


def main(argv: list[str] | None = None) -> int:
    """Run the transcript-stream CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    # --- Configure logging --------------------------------------------
    log_level = "DEBUG" if args.verbose else settings.log_level
    try:
        setup_logging(log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    fragment_size = args.fragment_size or settings.fragment_size
    max_buffer_chars = args.max_buffer_chars or settings.max_buffer_chars

    # --- Resolve the fragment source ----------------------------------
    if args.transcript_file == "-":
        source = "<stdin>"
        fragments = _stdin_fragments(fragment_size)
    else:
        path = Path(args.transcript_file)
        if not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return 1
        if not path.is_file():
            print(f"Error: Not a file: {path}", file=sys.stderr)
            return 1
        source = str(path)
        fragments = read_fragments(path, fragment_size)

    # --- Replay the stream --------------------------------------------
    try:
        result = collect_stream(
            fragments,
            source=source,
            max_buffer_chars=max_buffer_chars,
            on_entry=partial(print_entry, output_format=args.output_format),
        )
    except BufferLimitExceeded as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (PermissionError, UnicodeDecodeError) as exc:
        print(f"Error: Cannot read {source}: {exc}", file=sys.stderr)
        return 1

    print(format_summary(result), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
