"""Segment Aligner: time-aligned transcript chunking for language practice.

WHY: Listening, shadowing and pronunciation drills all work from the same
transcripts: sentences from a captioning provider, often with word-level
timestamps. They need two things from that data: short practice chunks
that end on natural pauses, and a fast answer to "which word is being
spoken right now" for karaoke-style highlighting.

HOW: A pure core (chunker, time locator, sentence splitting, playback
state reducers) over a small immutable IR, with input adapters, pluggable
chunk exporters, a CLI and a FastAPI service around it.

RULES:
- Core functions are pure and never raise for malformed timing data
- All layers share the IR in segment_aligner.core.ir
- Adding an export format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
