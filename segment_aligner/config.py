"""Configuration defaults, environment overrides and .env loading.

WHY: Chunk sizes and practice-sentence sizes are tuned per course and per
language, and the HTTP service needs a host, port and log level. Keeping
these as plain module-level values, overridable from the environment,
makes them easy to find and change without touching the algorithms.

HOW: python-dotenv loads the .env file on import. Values are read with
os.getenv() and fall back to the constants defined next to the algorithms
that use them. load_chunk_limits() and load_practice_limits() parse and
validate the word-count pairs.

RULES:
- Algorithm defaults live in core; this module only overrides them.
- Invalid overrides raise ValueError with the variable name in the message.
- Nothing here is read by core; callers pass limits in explicitly.
"""

from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

from segment_aligner.core.chunker import CHUNK_MAX_WORDS, CHUNK_MIN_WORDS, validate_limits
from segment_aligner.core.sentences import PRACTICE_MAX_WORDS, PRACTICE_MIN_WORDS

load_dotenv()

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------

ALIGNER_HOST = os.getenv("ALIGNER_HOST", "0.0.0.0")
ALIGNER_PORT = int(os.getenv("ALIGNER_PORT", "8000"))
ALIGNER_LOG_LEVEL = os.getenv("ALIGNER_LOG_LEVEL", "INFO").upper()

API_VERSION = "0.1.0"


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got '{}'. Fix it in the .env file or environment.".format(name, raw)
        )


def _read_limits(min_name: str, max_name: str, min_default: int, max_default: int) -> Tuple[int, int]:
    min_words = _read_int(min_name, min_default)
    max_words = _read_int(max_name, max_default)
    try:
        validate_limits(min_words, max_words)
    except ValueError as exc:
        raise ValueError("Invalid {}/{}: {}".format(min_name, max_name, exc))
    return min_words, max_words


def load_chunk_limits() -> Tuple[int, int]:
    """Return the (min_words, max_words) pair for practice chunks.

    RULES:
    - ALIGNER_CHUNK_MIN_WORDS / ALIGNER_CHUNK_MAX_WORDS override 3 / 10
    - Raises ValueError for non-integers, min < 1, or max < min
    """
    return _read_limits(
        "ALIGNER_CHUNK_MIN_WORDS", "ALIGNER_CHUNK_MAX_WORDS",
        CHUNK_MIN_WORDS, CHUNK_MAX_WORDS,
    )


def load_practice_limits() -> Tuple[int, int]:
    """Return the (min_words, max_words) pair for writing-practice sentences.

    RULES:
    - ALIGNER_PRACTICE_MIN_WORDS / ALIGNER_PRACTICE_MAX_WORDS override 10 / 25
    - Raises ValueError for non-integers, min < 1, or max < min
    """
    return _read_limits(
        "ALIGNER_PRACTICE_MIN_WORDS", "ALIGNER_PRACTICE_MAX_WORDS",
        PRACTICE_MIN_WORDS, PRACTICE_MAX_WORDS,
    )
