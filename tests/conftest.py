"""Shared test fixtures for the segment_aligner test suite.

WHY: Chunker, locator, formatter, CLI and API tests all need the same
small transcripts. Centralising them keeps the expected values in one
place.

HOW: make_words() builds evenly spaced timed words; fixtures provide a
two-word greeting segment, a two-sentence transcript and its raw JSON.

RULES:
- Word timing is deterministic: each word lasts 0.4s with a 0.1s gap.
- SAMPLE_TRANSCRIPT_JSON mirrors what a captioning provider returns.
"""

from typing import Any, Dict, List, Sequence

import pytest

from segment_aligner.core.ir import TimedWord, WordTimedSegment, make_segment


def make_words(texts: Sequence[str], start: float = 0.0, length: float = 0.4, gap: float = 0.1) -> List[TimedWord]:
    """Create timed words with sequential, non-overlapping timing."""
    words = []
    t = start
    for text in texts:
        words.append(TimedWord(text=text, start=t, end=t + length))
        t += length + gap
    return words


SAMPLE_TRANSCRIPT_JSON: List[Dict[str, Any]] = [
    {
        "text": "Hola, ¿cómo estás hoy?",
        "start": 0.0,
        "end": 2.5,
        "words": [
            {"text": "Hola,", "start": 0.0, "end": 0.4},
            {"text": "¿cómo", "start": 0.5, "end": 0.9},
            {"text": "estás", "start": 1.0, "end": 1.4},
            {"text": "hoy?", "start": 1.5, "end": 1.9},
        ],
    },
    {
        "text": "Muy bien, gracias por preguntar, y tú qué tal estás esta mañana tan bonita.",
        "start": 3.0,
        "end": 9.0,
    },
]


_LIMIT_ENV_VARS = (
    "ALIGNER_CHUNK_MIN_WORDS",
    "ALIGNER_CHUNK_MAX_WORDS",
    "ALIGNER_PRACTICE_MIN_WORDS",
    "ALIGNER_PRACTICE_MAX_WORDS",
)


@pytest.fixture(autouse=True)
def _clear_limit_env(monkeypatch):
    """Run every test against the built-in word limits unless it sets its own."""
    for name in _LIMIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def hi_there_segments():
    """One segment 0-10s whose two words end at 2s, leaving a long tail."""
    return [
        WordTimedSegment(
            text="Hi there",
            start=0.0,
            end=10.0,
            words=(
                TimedWord(text="Hi", start=0.0, end=1.0),
                TimedWord(text="there", start=1.0, end=2.0),
            ),
        )
    ]


@pytest.fixture
def two_sentence_segments():
    """A word-timed sentence followed by a sentence-timed one."""
    first = make_segment(
        text="Hola, ¿cómo estás hoy?",
        start=0.0,
        end=2.5,
        words=make_words(["Hola,", "¿cómo", "estás", "hoy?"]),
    )
    second = make_segment(
        text="Muy bien, gracias por preguntar, y tú qué tal estás esta mañana tan bonita.",
        start=3.0,
        end=9.0,
    )
    return [first, second]


@pytest.fixture
def sample_transcript_json():
    return [dict(item) for item in SAMPLE_TRANSCRIPT_JSON]
