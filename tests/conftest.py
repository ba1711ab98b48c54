"""Shared fixtures for transcript-stream tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"

_ENV_VARS = ("LOG_LEVEL", "FRAGMENT_SIZE", "MAX_BUFFER_CHARS")


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all transcript-stream environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("transcript_stream.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def fixtures_dir() -> Path:
    """Directory holding the JSON transcript fixture files."""
    return FIXTURES


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
