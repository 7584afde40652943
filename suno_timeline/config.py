"""Configuration constants and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Defaults for playback offset, the placeholder
duration, word splitting, logging and the HTTP API live here as plain
module-level values, not buried in logic.

HOW: python-dotenv loads the .env file on import. Each constant reads an
environment variable with a fallback default.

RULES:
- Every default can be overridden via a SUNO_TIMELINE_* environment variable
- Boolean variables accept "true"/"false" (case-insensitive)
- Numeric variables that fail to parse raise ValueError naming the variable
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError("{} must be a number, got {!r}".format(name, raw)) from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return raw.lower() == "true"


# ---------------------------------------------------------------------------
# Conversion defaults
# ---------------------------------------------------------------------------

DEFAULT_OFFSET_S = _env_float("SUNO_TIMELINE_OFFSET_S", 0.0)
"""Seconds added to every word's begin/end."""

DEFAULT_DURATION_S = _env_float("SUNO_TIMELINE_DURATION_S", 0.0)
"""Placeholder duration handed to the Lyric; the converter never computes it."""

DEFAULT_SPLIT_WORDS = _env_bool("SUNO_TIMELINE_SPLIT_WORDS", True)

# ---------------------------------------------------------------------------
# Logging and HTTP API
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("SUNO_TIMELINE_LOG_LEVEL", "WARNING").upper()
API_HOST = os.getenv("SUNO_TIMELINE_API_HOST", "127.0.0.1")
API_PORT = int(_env_float("SUNO_TIMELINE_API_PORT", 8000))


def resolve_log_level(verbose: bool = False) -> int:
    """Map the configured level name to a logging constant.

    Unknown names fall back to WARNING; ``verbose`` forces DEBUG.
    """
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(LOG_LEVEL)
    return level if isinstance(level, int) else logging.WARNING
