"""Plain text chunk list for printing and review.

WHY: Instructors prepare shadowing worksheets from the same chunks the app
drills. A numbered list with clock labels is readable on paper and
matches what the chunk timeline shows on screen.

HOW: One line per chunk: two-digit number, ``mm:ss – mm:ss`` range, then
the chunk text. Untimed chunks show ``--:--`` in place of the range ends.

RULES:
- Numbers are 1-based and zero-padded to two digits ("01", "02", ...)
- Clock labels are mm:ss with minutes unbounded (75:03 for long media)
- Lines are separated by a single newline, with a trailing newline
- Output suffix: "-chunks.txt"; media type "text/plain"
"""

from __future__ import annotations

import math
from typing import List, Optional

from segment_aligner.core.ir import ChunkedTranscript
from segment_aligner.formatters.base import BaseFormatter, FormatterOutput

UNTIMED_LABEL = "--:--"


def format_clock(seconds: Optional[float]) -> str:
    """Format seconds as mm:ss; ``--:--`` when there is no usable time."""
    if seconds is None or not math.isfinite(seconds):
        return UNTIMED_LABEL
    seconds = max(0.0, seconds)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return "{:02d}:{:02d}".format(minutes, secs)


class PlainTextFormatter(BaseFormatter):
    """Formatter producing a numbered, time-labelled chunk list."""

    @property
    def name(self) -> str:
        return "Plain Text"

    @property
    def suffix(self) -> str:
        return "-chunks.txt"

    def format(self, transcript: ChunkedTranscript) -> List[FormatterOutput]:
        lines = []
        for number, chunk in enumerate(transcript.chunks, 1):
            lines.append("{:02d}  {} – {}  {}".format(
                number, format_clock(chunk.start), format_clock(chunk.end), chunk.text
            ))
        content = "\n".join(lines) + "\n" if lines else ""
        return [FormatterOutput(
            suffix=self.suffix,
            content=content,
            media_type="text/plain",
        )]
