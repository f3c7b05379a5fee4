"""FastAPI application exposing chunking, time lookup and exports.

WHY: The practice client is a browser app. It fetches chunks when a
transcript loads, asks for practice sentences when a writing lesson is
imported, and downloads chunk exports for instructors. A small HTTP service
keeps that logic in one place instead of re-implementing it per client.

HOW: Each endpoint converts its pydantic request into the segment IR,
calls one pure core function and maps the result back to a response
model. Word limits default to the configured values (see config) and can
be overridden per request.

RULES:
- Endpoints are stateless; nothing is stored between requests
- Invalid word limits → 400 with ErrorResponse; unknown export format → 404
- Malformed timing is never rejected; core handles it permissively
- Logging goes through the module logger; run_api() configures handlers
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from segment_aligner.config import (
    ALIGNER_HOST,
    ALIGNER_LOG_LEVEL,
    ALIGNER_PORT,
    API_VERSION,
    load_chunk_limits,
    load_practice_limits,
)
from segment_aligner.core.chunker import chunk_text, chunk_transcript, chunk_words, validate_limits
from segment_aligner.core.ir import Chunk, ChunkedTranscript, Segment, TimedWord, make_segment
from segment_aligner.core.locator import locate, word_states
from segment_aligner.core.sentences import split_into_sentences, split_story_sentences
from segment_aligner.formatters import FORMATTERS
from segment_aligner.server.models import (
    ChunkListResponse,
    ChunkModel,
    ChunkTextRequest,
    ChunkTranscriptRequest,
    ChunkWordsRequest,
    ErrorResponse,
    ExportRequest,
    FormatInfo,
    HealthResponse,
    LocateRequest,
    LocationResponse,
    SegmentModel,
    SentenceMode,
    SentencesRequest,
    SentencesResponse,
    TimedWordModel,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Segment Aligner API",
    description=(
        "Chunk timed transcripts into short practice phrases, split prose "
        "into practice sentences, locate the active word for a playback "
        "time, and export chunks as JSON, SRT or plain text."
    ),
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

_LIMIT_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid word limits"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_words(models: List[TimedWordModel]) -> List[TimedWord]:
    return [TimedWord(text=w.text, start=w.start, end=w.end) for w in models]


def _to_segments(models: List[SegmentModel]) -> List[Segment]:
    return [
        make_segment(text=m.text, start=m.start, end=m.end, words=_to_words(m.words))
        for m in models
    ]


def _to_chunk_models(chunks: List[Chunk]) -> List[ChunkModel]:
    return [
        ChunkModel(
            text=c.text,
            start=c.start,
            end=c.end,
            word_count=c.word_count,
            segment_index=c.segment_index,
        )
        for c in chunks
    ]


def _resolve_limits(
    min_words: Optional[int],
    max_words: Optional[int],
    practice: bool = False,
) -> Tuple[int, int]:
    """Merge request limits with configured defaults; 400 if they don't fit together."""
    try:
        defaults = load_practice_limits() if practice else load_chunk_limits()
    except ValueError:
        logger.exception("Word limit configuration is invalid")
        raise HTTPException(status_code=500, detail="Server word limit configuration is invalid")

    resolved = (
        min_words if min_words is not None else defaults[0],
        max_words if max_words is not None else defaults[1],
    )
    try:
        validate_limits(*resolved)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return resolved


def _chunk_response(chunks: List[Chunk]) -> ChunkListResponse:
    return ChunkListResponse(chunk_count=len(chunks), chunks=_to_chunk_models(chunks))


# ---------------------------------------------------------------------------
# Endpoints: Chunks
# ---------------------------------------------------------------------------


@app.post(
    "/chunks/words",
    response_model=ChunkListResponse,
    tags=["chunks"],
    summary="Chunk word-timed input",
    description="Split one sentence's timed words into practice chunks, preferring to end on punctuation.",
    responses=_LIMIT_ERRORS,
)
async def chunk_words_endpoint(request: ChunkWordsRequest) -> ChunkListResponse:
    min_words, max_words = _resolve_limits(request.min_words, request.max_words)
    chunks = chunk_words(_to_words(request.words), min_words, max_words)
    logger.debug("Chunked %d words into %d chunks", len(request.words), len(chunks))
    return _chunk_response(chunks)


@app.post(
    "/chunks/text",
    response_model=ChunkListResponse,
    tags=["chunks"],
    summary="Chunk plain text",
    description=(
        "Split a sentence into practice chunks. When start and end are given, "
        "chunk times are interpolated over word positions."
    ),
    responses=_LIMIT_ERRORS,
)
async def chunk_text_endpoint(request: ChunkTextRequest) -> ChunkListResponse:
    min_words, max_words = _resolve_limits(request.min_words, request.max_words)
    return _chunk_response(chunk_text(request.text, request.start, request.end, min_words, max_words))


@app.post(
    "/chunks/transcript",
    response_model=ChunkListResponse,
    tags=["chunks"],
    summary="Chunk a whole transcript",
    description="Chunk every segment; chunks never cross a segment boundary.",
    responses=_LIMIT_ERRORS,
)
async def chunk_transcript_endpoint(request: ChunkTranscriptRequest) -> ChunkListResponse:
    min_words, max_words = _resolve_limits(request.min_words, request.max_words)
    chunks = chunk_transcript(_to_segments(request.segments), min_words, max_words)
    logger.info("Chunked %d segments into %d chunks", len(request.segments), len(chunks))
    return _chunk_response(chunks)


# ---------------------------------------------------------------------------
# Endpoints: Locate
# ---------------------------------------------------------------------------


@app.post(
    "/locate",
    response_model=LocationResponse,
    tags=["locate"],
    summary="Find the active segment and word",
    description=(
        "Return the segment and word containing the playback time (half-open "
        "intervals, first match wins) and the render state of each word."
    ),
)
async def locate_endpoint(request: LocateRequest) -> LocationResponse:
    segments = _to_segments(request.segments)
    location = locate(segments, request.current_time)
    if location.segment_index is None:
        return LocationResponse()
    return LocationResponse(
        segment_index=location.segment_index,
        word_index=location.word_index,
        in_gap=location.in_gap,
        word_states=word_states(segments[location.segment_index], location),
    )


# ---------------------------------------------------------------------------
# Endpoints: Sentences
# ---------------------------------------------------------------------------


@app.post(
    "/sentences",
    response_model=SentencesResponse,
    tags=["sentences"],
    summary="Split prose into sentences",
    description="Practice mode balances sentences to 10-25 words; story mode splits on . ! ? only.",
    responses=_LIMIT_ERRORS,
)
async def sentences_endpoint(request: SentencesRequest) -> SentencesResponse:
    if request.mode == SentenceMode.story:
        sentences = split_story_sentences(request.text)
    else:
        min_words, max_words = _resolve_limits(request.min_words, request.max_words, practice=True)
        sentences = split_into_sentences(request.text, min_words, max_words)
    return SentencesResponse(count=len(sentences), sentences=sentences)


# ---------------------------------------------------------------------------
# Endpoints: Exports and formats
# ---------------------------------------------------------------------------


@app.post(
    "/exports/{format_key}",
    tags=["exports"],
    summary="Export transcript chunks",
    description="Chunk the transcript and return it as a downloadable file in the requested format.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid word limits"},
        404: {"model": ErrorResponse, "description": "Unknown format"},
    },
)
async def export_endpoint(format_key: str, request: ExportRequest) -> Response:
    if format_key not in FORMATTERS:
        raise HTTPException(
            status_code=404,
            detail="Unknown format '{}'. Available: {}".format(
                format_key, ", ".join(sorted(FORMATTERS.keys()))
            ),
        )
    min_words, max_words = _resolve_limits(request.min_words, request.max_words)
    chunks = chunk_transcript(_to_segments(request.segments), min_words, max_words)
    transcript = ChunkedTranscript(source_filename=request.source_filename, chunks=tuple(chunks))

    output = FORMATTERS[format_key]().format(transcript)[0]
    filename = "{}{}".format(Path(request.source_filename).stem or "transcript", output.suffix)
    logger.info("Exported %d chunks as %s", len(chunks), filename)

    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["exports"],
    summary="List available export formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=API_VERSION)


def run_api():
    """Entry point for the segment-aligner-api console script."""
    import uvicorn

    logging.basicConfig(
        level=ALIGNER_LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.info("Starting Segment Aligner API on %s:%d", ALIGNER_HOST, ALIGNER_PORT)
    uvicorn.run(app, host=ALIGNER_HOST, port=ALIGNER_PORT)
