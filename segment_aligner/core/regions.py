"""Loop, selection and punch-in state for practice playback.

WHY: Intensive listening loops a slice of the current sentence, and the
recording workstation plays, loops and re-records a selected region of the
learner's take. The rules (pin spacing, region edges that cannot cross,
when a punch-in stops itself) are easy to get wrong when they are spread
across event handlers, so they live here as plain state values plus pure
functions that return the next state.

HOW: Each concern is a frozen dataclass. Reducers take the current state
and an input (a pointer position, a clock reading) and return a new state
via dataclasses.replace(). The UI keeps one value per concern and renders
from it.

RULES:
- Reducers never mutate their input.
- LoopRegion works in percent of the sentence; AudioRegion in seconds.
- Loop pins stay at least PIN_MIN_GAP percent apart.
- Region edges never cross: start < end after every drag.
- Dragging with no drag in progress returns the state unchanged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

PIN_MIN_GAP = 5.0

_PINS = ("start", "end")


# ---------------------------------------------------------------------------
# Sentence loop (percent pins)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoopRegion:
    """Loop pins over the active sentence, as percent of its duration."""

    start_percent: float = 0.0
    end_percent: float = 100.0
    dragging: Optional[str] = None


def begin_pin_drag(state: LoopRegion, pin: str) -> LoopRegion:
    if pin not in _PINS:
        raise ValueError("Unknown loop pin '{}'. Expected one of: {}".format(pin, ", ".join(_PINS)))
    return replace(state, dragging=pin)


def drag_pin(state: LoopRegion, percent: float) -> LoopRegion:
    """Move the pin being dragged to ``percent`` of the bar width."""
    if state.dragging is None:
        return state
    percent = max(0.0, min(100.0, percent))
    if state.dragging == "start":
        return replace(state, start_percent=min(percent, state.end_percent - PIN_MIN_GAP))
    return replace(state, end_percent=max(percent, state.start_percent + PIN_MIN_GAP))


def end_pin_drag(state: LoopRegion) -> LoopRegion:
    return replace(state, dragging=None)


def loop_bounds(state: LoopRegion, segment_start: float, segment_end: float) -> Tuple[float, float]:
    """Absolute loop start/end in seconds for a sentence span."""
    duration = segment_end - segment_start
    return (
        segment_start + duration * state.start_percent / 100.0,
        segment_start + duration * state.end_percent / 100.0,
    )


# ---------------------------------------------------------------------------
# Workstation selection (seconds)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AudioRegion:
    """Selected region of a recording; the full take by default."""

    start: float = 0.0
    end: float = 0.0
    duration: float = 0.0
    dragging: Optional[str] = None


@dataclass(frozen=True)
class PlaybackStep:
    """Where the playhead should be after a clock tick and whether to keep playing."""

    position: float
    playing: bool


def load_duration(duration: float) -> AudioRegion:
    """Fresh region covering a newly loaded take."""
    duration = max(0.0, duration)
    return AudioRegion(start=0.0, end=duration, duration=duration)


def begin_edge_drag(state: AudioRegion, edge: str) -> AudioRegion:
    if edge not in _PINS:
        raise ValueError("Unknown region edge '{}'. Expected one of: {}".format(edge, ", ".join(_PINS)))
    return replace(state, dragging=edge)


def drag_edge(state: AudioRegion, time: float) -> AudioRegion:
    """Move the dragged edge to ``time``; moves that would cross the other edge are ignored."""
    if state.dragging is None:
        return state
    time = max(0.0, min(state.duration, time))
    if state.dragging == "start":
        return replace(state, start=time) if time < state.end else state
    return replace(state, end=time) if time > state.start else state


def end_edge_drag(state: AudioRegion) -> AudioRegion:
    return replace(state, dragging=None)


def reset_region(state: AudioRegion) -> AudioRegion:
    return replace(state, start=0.0, end=state.duration, dragging=None)


def is_full_region(state: AudioRegion) -> bool:
    return state.start == 0 and state.end == state.duration


def playback_start_position(state: AudioRegion, position: float) -> float:
    """Position to start playing from: the region start if the playhead is outside it."""
    if position < state.start or position >= state.end:
        return state.start
    return position


def playback_tick(state: AudioRegion, position: float, looping: bool) -> PlaybackStep:
    """Advance playback for one clock reading.

    Reaching the region end either loops back to the region start or stops
    and rewinds to it.
    """
    if position >= state.end:
        return PlaybackStep(position=state.start, playing=looping)
    return PlaybackStep(position=position, playing=True)


# ---------------------------------------------------------------------------
# Punch-in recording
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PunchInState:
    """A pending re-recording of part of an existing take.

    An inactive state means a normal, full-length recording.
    """

    active: bool = False
    start: float = 0.0
    end: float = 0.0

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class SpliceLayout:
    """Sample counts of a spliced take: original head, new take, original tail."""

    before: int
    inserted: int
    after: int

    @property
    def total(self) -> int:
        return self.before + self.inserted + self.after


def plan_recording(region: AudioRegion, has_audio: bool) -> PunchInState:
    """Decide between a full recording and a punch-in over the selection."""
    if not has_audio or is_full_region(region):
        return PunchInState()
    return PunchInState(active=True, start=region.start, end=region.end)


def should_auto_stop(state: PunchInState, recording_time: float) -> bool:
    """True once a punch-in has recorded as long as the region it replaces."""
    return state.active and state.duration > 0 and recording_time >= state.duration


def finish_punch_in(state: PunchInState) -> PunchInState:
    """Close a punch-in once its take is spliced; a normal recording is left as is."""
    if not state.active:
        return state
    return PunchInState()


def splice_layout(
    original_samples: int,
    new_samples: int,
    sample_rate: int,
    start: float,
    end: float,
) -> SpliceLayout:
    """Compute how a punch-in take replaces ``[start, end)`` of the original.

    The new take is inserted whole, so the spliced result can be longer or
    shorter than the original.
    """
    start_sample = min(original_samples, int(math.floor(start * sample_rate)))
    end_sample = int(math.floor(end * sample_rate))
    return SpliceLayout(
        before=max(0, start_sample),
        inserted=new_samples,
        after=max(0, original_samples - end_sample),
    )
