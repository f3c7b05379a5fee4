"""Core alignment logic and intermediate representation.

WHY: The core package holds everything that is a pure function of
transcript data: the IR dataclasses, the chunker, the time locator,
sentence splitting and the playback/panel state reducers. Adapters,
formatters, the CLI and the HTTP API are thin layers on top.

HOW: ir.py defines the data, chunker.py and locator.py implement the two
alignment operations, sentences.py handles prose input, regions.py and
panel.py hold UI state transitions.

RULES:
- Nothing in core does I/O, logging or configuration lookups.
- Limits are passed in explicitly; defaults are module constants.
"""

from segment_aligner.core.chunker import (
    CHUNK_MAX_WORDS,
    CHUNK_MIN_WORDS,
    chunk_segment,
    chunk_text,
    chunk_transcript,
    chunk_words,
)
from segment_aligner.core.ir import (
    ActiveLocation,
    Chunk,
    ChunkedTranscript,
    PlainSegment,
    TimedWord,
    WordState,
    WordTimedSegment,
    make_segment,
)
from segment_aligner.core.locator import locate, word_states

__all__ = [
    "CHUNK_MAX_WORDS",
    "CHUNK_MIN_WORDS",
    "ActiveLocation",
    "Chunk",
    "ChunkedTranscript",
    "PlainSegment",
    "TimedWord",
    "WordState",
    "WordTimedSegment",
    "chunk_segment",
    "chunk_text",
    "chunk_transcript",
    "chunk_words",
    "locate",
    "make_segment",
    "word_states",
]
