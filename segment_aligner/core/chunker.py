"""Chunking of timed words and plain sentences into practice-sized slices.

WHY: Shadowing and pronunciation drills work on short phrases, not whole
sentences. A sentence of 25 words is too long to repeat back; three to ten
words is a comfortable span. Ending a chunk on punctuation keeps the slices
sounding natural, so the chunker prefers those boundaries when it can.

HOW: A greedy left-to-right scan. From each chunk start ``i`` it looks at
the window ``[i + min_words - 1, i + max_words)`` and ends the chunk at the
first token that ends with punctuation. When the window has none, the chunk
fills to ``max_words`` (or to the end of the input). The same scan serves
both entry points:
  1. chunk_words(): timestamps come straight from the first/last word.
  2. chunk_text(): timestamps are interpolated linearly over token
     positions when the sentence start/end are known.

RULES:
- Inputs of at most max_words tokens come back as a single chunk.
- Empty input returns an empty list; malformed timing is passed through.
- Chunk boundaries never split a word; joining all chunk texts with a
  single space reproduces the input tokens.
- The window upper bound is exclusive for both entry points.
- No chunk crosses a segment boundary in chunk_transcript().
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .ir import Chunk, PlainSegment, Segment, TimedWord, WordTimedSegment

CHUNK_MIN_WORDS = 3
CHUNK_MAX_WORDS = 10

PUNCTUATION = frozenset({".", ",", ";", ":", "!", "?"})


def ends_with_punctuation(token: str) -> bool:
    """True if the token's last character is a chunk-ending punctuation mark."""
    return bool(token) and token[-1] in PUNCTUATION


def validate_limits(min_words: int, max_words: int) -> None:
    """Raise ValueError for limits the scan cannot honour."""
    if min_words < 1:
        raise ValueError("min_words must be at least 1, got {}".format(min_words))
    if max_words < min_words:
        raise ValueError(
            "max_words ({}) must not be smaller than min_words ({})".format(
                max_words, min_words
            )
        )


def plan_chunks(
    tokens: Sequence[str],
    min_words: int = CHUNK_MIN_WORDS,
    max_words: int = CHUNK_MAX_WORDS,
) -> List[Tuple[int, int]]:
    """Return inclusive ``(first, last)`` token index pairs for each chunk.

    WHY: Both chunkers share the boundary logic; only the way they attach
    timing differs. Keeping the scan over plain strings lets it be tested
    without building timed words.

    HOW: See module docstring. The default end candidate is
    ``i + min_words - 1``; the punctuation search runs over the window
    ``[i + min_words - 1, min(i + max_words, n))`` and the first hit wins.

    Args:
        tokens: Word texts in order.
        min_words: Lower bound on chunk size (except the final chunk).
        max_words: Upper bound on chunk size.

    Returns:
        List of inclusive index ranges covering every token exactly once.
    """
    validate_limits(min_words, max_words)
    n = len(tokens)
    if n == 0:
        return []
    if n <= max_words:
        return [(0, n - 1)]

    ranges = []  # type: List[Tuple[int, int]]
    i = 0
    while i < n:
        window_start = min(i + min_words - 1, n - 1)
        window_end = min(i + max_words, n)

        end = None  # type: Optional[int]
        for k in range(window_start, window_end):
            if ends_with_punctuation(tokens[k]):
                end = k
                break

        if end is None:
            end = min(i + max_words - 1, n - 1)

        ranges.append((i, end))
        i = end + 1

    return ranges


def chunk_words(
    words: Sequence[TimedWord],
    min_words: int = CHUNK_MIN_WORDS,
    max_words: int = CHUNK_MAX_WORDS,
) -> List[Chunk]:
    """Split word-timed input into practice chunks.

    Each chunk starts at its first word's start and ends at its last
    word's end.

    Args:
        words: Time-ordered words of one sentence or segment.
        min_words: Minimum words per chunk (the last chunk may be shorter).
        max_words: Maximum words per chunk.

    Returns:
        Chunks in order; empty list for empty input.
    """
    ranges = plan_chunks([w.text for w in words], min_words, max_words)
    chunks = []
    for first, last in ranges:
        covered = words[first:last + 1]
        chunks.append(Chunk(
            text=" ".join(w.text for w in covered),
            start=covered[0].start,
            end=covered[-1].end,
        ))
    return chunks


def _is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def chunk_text(
    text: Optional[str],
    start: Optional[float] = None,
    end: Optional[float] = None,
    min_words: int = CHUNK_MIN_WORDS,
    max_words: int = CHUNK_MAX_WORDS,
) -> List[Chunk]:
    """Split a plain sentence into practice chunks.

    WHY: Stories and sentence-level captions have no per-word timing, but
    the shadowing player still needs a rough span to seek to for each chunk.

    HOW: Whitespace-split the text, plan chunks with the shared scan, then
    interpolate each chunk's timing over token positions:
    ``start + span * first / total`` and ``start + span * (last + 1) / total``.

    RULES:
    - Timing is only produced when both start and end are finite numbers.
    - end < start is not corrected; the interpolation just runs backwards.

    Args:
        text: The sentence text.
        start: Sentence start in seconds, optional.
        end: Sentence end in seconds, optional.
        min_words: Minimum tokens per chunk.
        max_words: Maximum tokens per chunk.

    Returns:
        Chunks in order; empty list for blank text.
    """
    tokens = (text or "").split()
    ranges = plan_chunks(tokens, min_words, max_words)
    timed = _is_number(start) and _is_number(end)
    total = len(tokens)

    chunks = []
    for first, last in ranges:
        chunk_start = None  # type: Optional[float]
        chunk_end = None  # type: Optional[float]
        if timed:
            span = end - start
            chunk_start = start + span * (first / total)
            chunk_end = start + span * ((last + 1) / total)
        chunks.append(Chunk(
            text=" ".join(tokens[first:last + 1]),
            start=chunk_start,
            end=chunk_end,
        ))
    return chunks


def chunk_segment(
    segment: Segment,
    min_words: int = CHUNK_MIN_WORDS,
    max_words: int = CHUNK_MAX_WORDS,
) -> List[Chunk]:
    """Chunk one segment, using word timing when the segment carries it."""
    if isinstance(segment, WordTimedSegment):
        return chunk_words(segment.words, min_words, max_words)
    if isinstance(segment, PlainSegment):
        return chunk_text(segment.text, segment.start, segment.end, min_words, max_words)
    raise TypeError("Unsupported segment type: {}".format(type(segment).__name__))


def chunk_transcript(
    segments: Sequence[Segment],
    min_words: int = CHUNK_MIN_WORDS,
    max_words: int = CHUNK_MAX_WORDS,
) -> List[Chunk]:
    """Chunk every segment of a transcript, tagging chunks with their segment.

    Chunks never span two segments; a short sentence yields a short chunk
    rather than borrowing words from its neighbour.
    """
    validate_limits(min_words, max_words)
    chunks = []  # type: List[Chunk]
    for index, segment in enumerate(segments):
        for chunk in chunk_segment(segment, min_words, max_words):
            chunks.append(replace(chunk, segment_index=index))
    return chunks
