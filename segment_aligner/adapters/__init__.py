"""Input adapters that turn external transcript data into the segment IR.

WHY: Provider formats change independently of the alignment logic.
Keeping the translation in adapters means core never sees raw JSON.

RULES:
- Adapters validate and normalise; they never chunk or locate.
"""

from segment_aligner.adapters.transcript_adapter import (
    parse_transcript,
    segments_from_text,
    try_parse_json,
)

__all__ = ["parse_transcript", "segments_from_text", "try_parse_json"]
