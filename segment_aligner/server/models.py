"""Pydantic request/response models for the HTTP API.

WHY: The practice client calls the aligner over HTTP when it loads a
transcript (chunking) and when it needs a server-side highlight lookup.
FastAPI uses these models for request validation, response serialisation
and the OpenAPI documentation at /docs.

HOW: One request model per operation, plus shared word/segment/chunk
models. Times are float seconds throughout. Word-limit fields are
optional; omitted limits fall back to the configured defaults.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- current_time accepts any JSON value; non-numeric values count as 0
- Response models mirror the core IR and never add derived state that
  the client could not recompute
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from segment_aligner.core.ir import WordState


# ---------------------------------------------------------------------------
# Shared shapes
# ---------------------------------------------------------------------------


class TimedWordModel(BaseModel):
    """A transcribed word with its spoken interval."""

    text: str = Field(description="Word text, punctuation included.")
    start: float = Field(allow_inf_nan=False, description="Start time in seconds.")
    end: float = Field(allow_inf_nan=False, description="End time in seconds.")


class SegmentModel(BaseModel):
    """A transcript segment (usually one sentence).

    RULES:
    - words, when non-empty, makes this a word-timed segment
    - start/end may be omitted for untimed prose, or when words are given
    """

    text: str = Field(default="", description="Segment text.")
    start: Optional[float] = Field(default=None, allow_inf_nan=False, description="Segment start in seconds.")
    end: Optional[float] = Field(default=None, allow_inf_nan=False, description="Segment end in seconds.")
    words: List[TimedWordModel] = Field(
        default_factory=list,
        description="Word-level timestamps, time-ordered and non-overlapping.",
    )


class ChunkModel(BaseModel):
    """One practice chunk."""

    text: str = Field(description="Space-joined words of the chunk.")
    start: Optional[float] = Field(default=None, description="Chunk start in seconds, null when untimed.")
    end: Optional[float] = Field(default=None, description="Chunk end in seconds, null when untimed.")
    word_count: int = Field(description="Number of words in the chunk.")
    segment_index: Optional[int] = Field(
        default=None,
        description="Index of the source segment (transcript chunking only).",
    )


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ChunkLimits(BaseModel):
    """Optional per-request word limits."""

    min_words: Optional[int] = Field(
        default=None, ge=1,
        description="Minimum words per chunk. Defaults to the configured value (3).",
    )
    max_words: Optional[int] = Field(
        default=None, ge=1,
        description="Maximum words per chunk. Defaults to the configured value (10).",
    )


class ChunkWordsRequest(ChunkLimits):
    words: List[TimedWordModel] = Field(description="Time-ordered words of one sentence.")


class ChunkTextRequest(ChunkLimits):
    text: str = Field(description="Sentence or prose to chunk.")
    start: Optional[float] = Field(default=None, allow_inf_nan=False, description="Start of the text in seconds.")
    end: Optional[float] = Field(default=None, allow_inf_nan=False, description="End of the text in seconds.")


class ChunkTranscriptRequest(ChunkLimits):
    segments: List[SegmentModel] = Field(description="Transcript segments in time order.")


class ExportRequest(ChunkTranscriptRequest):
    source_filename: str = Field(
        default="transcript",
        description="Name used for the exported file (its stem) and inside the export.",
    )


class LocateRequest(BaseModel):
    segments: List[SegmentModel] = Field(description="Transcript segments in time order.")
    current_time: Any = Field(
        default=0,
        description="Playback time in seconds. Non-numeric values are treated as 0.",
    )


class SentenceMode(str, Enum):
    """How prose is split into sentences."""

    practice = "practice"
    story = "story"


class SentencesRequest(BaseModel):
    text: str = Field(description="Prose to split.")
    mode: SentenceMode = Field(
        default=SentenceMode.practice,
        description="'practice' combines/splits to 10-25 words; 'story' splits on punctuation only.",
    )
    min_words: Optional[int] = Field(default=None, ge=1, description="Practice mode minimum words.")
    max_words: Optional[int] = Field(default=None, ge=1, description="Practice mode maximum words.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ChunkListResponse(BaseModel):
    chunk_count: int = Field(description="Number of chunks returned.")
    chunks: List[ChunkModel] = Field(description="Chunks in playback order.")


class LocationResponse(BaseModel):
    """Active segment/word for a playback time.

    RULES:
    - segment_index is null when no segment contains the time
    - in_gap is true between the last word's end and the segment's end
    - word_states is empty unless the active segment has word timing
    """

    segment_index: Optional[int] = Field(default=None, description="Active segment index.")
    word_index: Optional[int] = Field(default=None, description="Active word index within the segment.")
    in_gap: bool = Field(default=False, description="Past the last word but inside the segment.")
    word_states: List[WordState] = Field(
        default_factory=list,
        description="Render state per word of the active segment.",
    )


class SentencesResponse(BaseModel):
    count: int = Field(description="Number of sentences.")
    sentences: List[str] = Field(description="Sentences in order.")


class FormatInfo(BaseModel):
    """Description of an available export format."""

    key: str = Field(description="Format identifier used in /exports/{key}.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-chunks.srt').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
