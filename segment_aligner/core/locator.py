"""Playback-time lookup for karaoke highlighting.

WHY: The subtitle overlay re-renders on every tick of the media clock and
needs to know which sentence is on screen and which word is being spoken.
It also needs the "gap" state: the last word has finished but the sentence
is still on screen, so every word should render as already spoken.

HOW: Two linear scans with half-open intervals. The first segment with
``start <= t < end`` is active; inside a word-timed segment the first word
with ``start <= t < end`` is active. No word match past the last word's end
means the gap state.

RULES:
- Pure functions of their arguments; safe to call on every clock tick.
- Non-numeric or NaN times are treated as 0, negative times clamp to 0.
- Untimed plain segments (stories) are never active.
- Overlapping or unordered input is not validated; the first match in list
  order wins.
- With well-formed input, increasing times never move the active word
  index backwards within a segment.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence, Tuple

from .ir import NO_LOCATION, ActiveLocation, Segment, WordState, WordTimedSegment


def coerce_time(value: Any) -> float:
    """Convert a playback-clock reading to a non-negative float."""
    try:
        t = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(t):
        return 0.0
    return max(0.0, t)


def locate(segments: Sequence[Segment], current_time: Any) -> ActiveLocation:
    """Find the active segment and word for a playback time.

    Args:
        segments: Time-ordered, non-overlapping transcript segments.
        current_time: Media clock reading in seconds (any type).

    Returns:
        ActiveLocation; NO_LOCATION when no segment contains the time.
    """
    t = coerce_time(current_time)

    segment_index = None  # type: Optional[int]
    for index, segment in enumerate(segments):
        if segment.is_timed and segment.start <= t < segment.end:
            segment_index = index
            break

    if segment_index is None:
        return NO_LOCATION

    segment = segments[segment_index]
    if not isinstance(segment, WordTimedSegment) or not segment.words:
        return ActiveLocation(segment_index=segment_index)

    for word_index, word in enumerate(segment.words):
        if word.start <= t < word.end:
            return ActiveLocation(segment_index=segment_index, word_index=word_index)

    in_gap = t > segment.words[-1].end
    return ActiveLocation(segment_index=segment_index, in_gap=in_gap)


def is_word_past(location: ActiveLocation, word_index: int) -> bool:
    """True if the word at word_index should render as already spoken."""
    if location.in_gap:
        return True
    if location.word_index is None:
        return False
    return word_index < location.word_index


def word_states(segment: Segment, location: ActiveLocation) -> List[WordState]:
    """Per-word render state for the highlight sweep of one segment.

    Plain segments have no words and return an empty list.
    """
    if not isinstance(segment, WordTimedSegment):
        return []

    states = []
    for index in range(len(segment.words)):
        if index == location.word_index:
            states.append(WordState.ACTIVE)
        elif is_word_past(location, index):
            states.append(WordState.PAST)
        else:
            states.append(WordState.UPCOMING)
    return states


def segments_in_range(
    segments: Sequence[Segment],
    start: Optional[float],
    end: Optional[float],
) -> List[Tuple[int, Segment]]:
    """Segments whose start falls inside ``[start, end)``.

    Used to map a listening chunk back onto the transcript lines it covers.
    An unusable window (missing, non-finite or empty) selects every segment.
    """
    valid = (
        start is not None
        and end is not None
        and math.isfinite(start)
        and math.isfinite(end)
        and end > start
    )
    if not valid:
        return list(enumerate(segments))
    return [
        (index, segment)
        for index, segment in enumerate(segments)
        if segment.is_timed and start <= segment.start < end
    ]


def playback_progress(position: Any, start: float, end: float) -> float:
    """Percent of the ``[start, end]`` window covered by the playback position.

    The position is clamped into the window first; an empty or inverted
    window reports 0.
    """
    duration = max(0.0, end - start)
    if not duration:
        return 0.0
    clamped = min(max(coerce_time(position), start), end)
    return min(100.0, (clamped - start) / duration * 100.0)
