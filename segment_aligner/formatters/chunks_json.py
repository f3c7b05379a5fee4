"""JSON chunk export consumed by the practice client.

WHY: The web client caches chunks per content item and renders them as
the chunk timeline (numbered pills with a time range). It needs the chunk
text, timing, word count and the sentence each chunk came from.

HOW: Serialises the ChunkedTranscript to a flat JSON document and
validates it against chunks.schema.json before returning it, so a broken
export fails here rather than in the client.

RULES:
- Untimed chunks export start/end as null.
- ``index`` is the 0-based position in playback order.
- Output suffix: "-chunks.json"; media type "application/json".
- Output always validates against the packaged schema.
- Non-finite times raise ValueError instead of producing NaN tokens.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from segment_aligner.core.ir import ChunkedTranscript
from segment_aligner.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "chunks.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the chunk export schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def build_chunks_document(transcript: ChunkedTranscript) -> Dict[str, Any]:
    """Build the export document as plain dicts (shared with the HTTP API)."""
    chunks: List[Dict[str, Any]] = []
    for index, chunk in enumerate(transcript.chunks):
        chunks.append({
            "index": index,
            "text": chunk.text,
            "word_count": chunk.word_count,
            "start": chunk.start,
            "end": chunk.end,
            "segment_index": chunk.segment_index,
        })
    return {
        "source": transcript.source_filename,
        "chunk_count": len(chunks),
        "chunks": chunks,
    }


class ChunksJSONFormatter(BaseFormatter):
    """Formatter producing the client-facing chunk JSON."""

    @property
    def name(self) -> str:
        return "Chunk JSON"

    @property
    def suffix(self) -> str:
        return "-chunks.json"

    def format(self, transcript: ChunkedTranscript) -> List[FormatterOutput]:
        document = build_chunks_document(transcript)
        jsonschema.validate(instance=document, schema=_get_schema())
        return [FormatterOutput(
            suffix=self.suffix,
            content=json.dumps(document, ensure_ascii=False, indent=2, allow_nan=False),
            media_type="application/json",
        )]
