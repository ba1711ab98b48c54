"""Unit tests for the CLI entrypoint.

Tests cover: text and JSON output, stdin input, missing arguments,
nonexistent file, directory argument, buffer limit, invalid flags,
environment configuration, and the summary line.
"""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from transcript_stream.__main__ import main

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

TRANSCRIPT = (
    '[{"timestamp": "00:00", "speaker": "Alice", "text": "Hey, lunch Thursday?"},\n'
    ' oops,\n'
    ' {"timestamp": "00:04", "speaker": "Bob", "text": "Sure!"}]\n'
)


def _make_transcript(tmp_path: Path, name: str = "sample.json") -> Path:
    """Create a small transcript file and return its path."""
    transcript = tmp_path / name
    transcript.write_text(TRANSCRIPT, encoding="utf-8")
    return transcript


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCLI:
    """Unit tests for ``transcript_stream.__main__.main``."""

    def test_text_output(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Valid file -> one line per entry, exit code 0."""
        exit_code = main([str(_make_transcript(tmp_path)), "--fragment-size", "3"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert captured.out.splitlines() == [
            "[00:00] Alice: Hey, lunch Thursday?",
            "[00:04] Bob: Sure!",
        ]
        assert "2 entries, 2 speakers, 1 discarded, complete" in captured.err

    def test_json_output(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--format json prints one JSON object per line."""
        exit_code = main([str(_make_transcript(tmp_path)), "--format", "json"])

        lines = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert [json.loads(line)["speaker"] for line in lines] == ["Alice", "Bob"]

    def test_stdin_input(
        self,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """'-' reads the transcript from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(TRANSCRIPT))

        exit_code = main(["-", "--fragment-size", "10"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert len(captured.out.splitlines()) == 2
        assert "<stdin>" in captured.err

    def test_missing_file_argument_shows_usage(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """No arguments -> exit code 2, stderr contains 'usage'."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "usage" in capsys.readouterr().err.lower()

    def test_nonexistent_file(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Nonexistent file -> exit code 1 with an error message."""
        exit_code = main([str(tmp_path / "nope.json")])

        assert exit_code == 1
        assert "File not found" in capsys.readouterr().err

    def test_directory_argument(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A directory is rejected with exit code 1."""
        exit_code = main([str(tmp_path)])

        assert exit_code == 1
        assert "Not a file" in capsys.readouterr().err

    def test_buffer_limit(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An entry larger than --max-buffer-chars aborts with exit code 1."""
        exit_code = main(
            [str(_make_transcript(tmp_path)), "--max-buffer-chars", "10", "--fragment-size", "5"]
        )

        assert exit_code == 1
        assert "exceeds 10 characters" in capsys.readouterr().err

    def test_buffer_limit_from_environment(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """MAX_BUFFER_CHARS applies when the flag is not given."""
        monkeypatch.setenv("MAX_BUFFER_CHARS", "10")
        monkeypatch.setenv("FRAGMENT_SIZE", "5")

        exit_code = main([str(_make_transcript(tmp_path))])

        assert exit_code == 1
        assert "exceeds 10 characters" in capsys.readouterr().err

    @pytest.mark.parametrize("flag", ["--fragment-size", "--max-buffer-chars"])
    @pytest.mark.parametrize("value", ["0", "-1", "ten"])
    def test_invalid_numeric_flags(
        self, tmp_path: Path, flag: str, value: str
    ) -> None:
        """Non-positive or non-numeric flag values are argparse errors."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(_make_transcript(tmp_path)), flag, value])

        assert exc_info.value.code == 2

    def test_invalid_environment(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Invalid configuration -> exit code 1 naming the variable."""
        monkeypatch.setenv("FRAGMENT_SIZE", "huge")

        exit_code = main([str(_make_transcript(tmp_path))])

        assert exit_code == 1
        assert "FRAGMENT_SIZE" in capsys.readouterr().err

    def test_invalid_log_level(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """An unknown LOG_LEVEL -> exit code 1."""
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")

        exit_code = main([str(_make_transcript(tmp_path))])

        assert exit_code == 1
        assert "Invalid log level" in capsys.readouterr().err

    def test_verbose_flag_enables_debug_logs(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """-v logs each parsed entry at DEBUG on stderr."""
        exit_code = main([str(_make_transcript(tmp_path)), "-v"])

        err = capsys.readouterr().err
        assert exit_code == 0
        assert "DEBUG" in err
        assert "Parsed entry 1" in err
