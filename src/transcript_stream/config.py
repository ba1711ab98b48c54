"""Configuration loading for transcript-stream.

Reads settings from environment variables (with .env support via
python-dotenv).  Every setting is optional; values that are present must
be valid.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_FRAGMENT_SIZE = 4096


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        fragment_size: Number of characters per fragment when replaying a
            file through the parser (default ``4096``).
        max_buffer_chars: Maximum length of the parser's carry before the
            stream is abandoned, or ``None`` for no cap.
    """

    log_level: str = "INFO"
    fragment_size: int = DEFAULT_FRAGMENT_SIZE
    max_buffer_chars: int | None = None


def _positive_int(env_var: str, raw: str, invalid: list[str]) -> int | None:
    """Parse *raw* as a positive integer, recording *env_var* on failure."""
    try:
        value = int(raw)
    except ValueError:
        invalid.append(env_var)
        return None
    if value <= 0:
        invalid.append(env_var)
        return None
    return value


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Blank values are treated as unset.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``FRAGMENT_SIZE`` or ``MAX_BUFFER_CHARS`` is not a
            positive integer.  The error message names **all** invalid
            variables.
    """
    load_dotenv()

    values: dict[str, object] = {}
    invalid: list[str] = []

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    if log_level:
        values["log_level"] = log_level

    for env_var, field_name in (
        ("FRAGMENT_SIZE", "fragment_size"),
        ("MAX_BUFFER_CHARS", "max_buffer_chars"),
    ):
        raw = os.environ.get(env_var, "").strip()
        if not raw:
            continue
        parsed = _positive_int(env_var, raw, invalid)
        if parsed is not None:
            values[field_name] = parsed

    if invalid:
        names = ", ".join(invalid)
        raise ConfigError(f"Expected positive integers for environment variables: {names}")

    return Settings(**values)
