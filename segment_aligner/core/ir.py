"""Intermediate representation dataclasses for timed transcripts and chunks.

WHY: Transcription providers hand us sentences, sometimes with word-level
timestamps and sometimes without. The chunker, the time locator, the
exporters and the HTTP layer all need the same well-typed view of that
data, so the shapes live here and nowhere else.

HOW: Frozen dataclasses form a small hierarchy:
  TimedWord: one word with start/end in seconds
  WordTimedSegment: a sentence span that carries its words
  PlainSegment: a sentence span with no word timing
  Chunk: a bounded practice slice of a sentence
  ActiveLocation: result of locating a playback time
  ChunkedTranscript: chunks plus the source name, consumed by formatters

RULES:
- Everything is immutable; words are stored as tuples.
- A segment is either WordTimedSegment or PlainSegment, never "maybe has
  words". Dispatch on the class (or ``kind``), not on ``len(words)``.
- make_segment() is the only place that decides which variant to build.
- All times are float seconds.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class TimedWord:
    """A single word with its spoken interval.

    Attributes:
        text: The word as transcribed, punctuation included.
        start: Start time in seconds.
        end: End time in seconds.
    """

    text: str
    start: float
    end: float


@dataclass(frozen=True)
class WordTimedSegment:
    """A transcript span (usually one sentence) with per-word timestamps.

    RULES:
    - words is time-ordered and inside [start, end]; make_segment() only
      builds this variant for a non-empty list, and locate() treats an
      empty tuple like a plain segment
    - ordering and overlap are the producer's responsibility
    """

    text: str
    start: float
    end: float
    words: Tuple[TimedWord, ...]

    kind = "words"

    @property
    def is_timed(self) -> bool:
        return True


@dataclass(frozen=True)
class PlainSegment:
    """A transcript span with sentence-level timing only.

    start/end are None for untimed prose (stories); such segments can be
    chunked but are never active during playback.
    """

    text: str
    start: Optional[float] = None
    end: Optional[float] = None

    kind = "plain"

    @property
    def is_timed(self) -> bool:
        return self.start is not None and self.end is not None


Segment = Union[WordTimedSegment, PlainSegment]


def make_segment(
    text: str,
    start: Optional[float] = None,
    end: Optional[float] = None,
    words: Optional[Sequence[TimedWord]] = None,
) -> Segment:
    """Build the right segment variant for the given data.

    A segment with at least one word becomes a WordTimedSegment; missing
    bounds are taken from its first and last word. Anything else becomes a
    PlainSegment.
    """
    if words:
        words = tuple(words)
        return WordTimedSegment(
            text=text or " ".join(w.text for w in words),
            start=words[0].start if start is None else start,
            end=words[-1].end if end is None else end,
            words=words,
        )
    return PlainSegment(text=text, start=start, end=end)


@dataclass(frozen=True)
class Chunk:
    """A bounded slice of a sentence used as a practice prompt.

    Attributes:
        text: Space-joined words of the slice.
        start: Start in seconds, or None when the source had no timing.
        end: End in seconds, or None when the source had no timing.
        segment_index: Index of the source segment when chunked from a
            whole transcript, otherwise None.
    """

    text: str
    start: Optional[float] = None
    end: Optional[float] = None
    segment_index: Optional[int] = None

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def is_timed(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class ActiveLocation:
    """Which segment and word a playback time falls into.

    in_gap is True when the time is past the last word's end but still
    inside the segment (trailing silence, a pause after punctuation).
    """

    segment_index: Optional[int] = None
    word_index: Optional[int] = None
    in_gap: bool = False

    @property
    def has_segment(self) -> bool:
        return self.segment_index is not None


NO_LOCATION = ActiveLocation()


class WordState(str, enum.Enum):
    """Render state of a word in the highlight sweep."""

    PAST = "past"
    ACTIVE = "active"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class ChunkedTranscript:
    """Chunks derived from one content item, ready for export.

    Attributes:
        source_filename: Original transcript filename (used for naming
            output files and shown in exports).
        chunks: Chunks in playback order.
    """

    source_filename: str
    chunks: Tuple[Chunk, ...] = field(default_factory=tuple)
