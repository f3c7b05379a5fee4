"""SRT export of practice chunks.

WHY: Learners and instructors load chunk cues into ordinary video players to
drill a clip phrase by phrase. SRT is the format every player accepts.

HOW: One cue per timed chunk, numbered from 1, with ``HH:MM:SS,mmm``
timestamps. Chunks without timing (stories, untimed prose) have nowhere to
go on a timeline and are left out.

RULES:
- Untimed chunks are skipped; numbering stays contiguous.
- A cue never ends before it starts (end is raised to start).
- Output suffix: "-chunks.srt"; media type "application/x-subrip".
"""

from __future__ import annotations

from typing import List

from segment_aligner.core.ir import ChunkedTranscript
from segment_aligner.formatters.base import BaseFormatter, FormatterOutput


def seconds_to_srt_time(seconds: float) -> str:
    """Convert seconds to SRT timestamp format: HH:MM:SS,mmm"""
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def generate_srt(transcript: ChunkedTranscript) -> str:
    """Render timed chunks as SRT text."""
    lines = []  # type: List[str]
    number = 0
    for chunk in transcript.chunks:
        if not chunk.is_timed:
            continue
        number += 1
        end = max(chunk.start, chunk.end)
        lines.append(str(number))
        lines.append("{} --> {}".format(seconds_to_srt_time(chunk.start), seconds_to_srt_time(end)))
        lines.append(chunk.text)
        lines.append("")
    return "\n".join(lines)


class ChunksSRTFormatter(BaseFormatter):
    """Formatter producing one SRT cue per timed chunk."""

    @property
    def name(self) -> str:
        return "Chunk SRT"

    @property
    def suffix(self) -> str:
        return "-chunks.srt"

    def format(self, transcript: ChunkedTranscript) -> List[FormatterOutput]:
        return [FormatterOutput(
            suffix=self.suffix,
            content=generate_srt(transcript),
            media_type="application/x-subrip",
        )]
