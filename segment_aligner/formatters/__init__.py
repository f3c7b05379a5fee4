"""Chunk exporter registry.

WHY: The CLI and the HTTP API need a single lookup to find an exporter by
name. Adding a format is one new module plus one line here.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["chunks_srt"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and URL paths)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from segment_aligner.formatters.chunks_json import ChunksJSONFormatter
from segment_aligner.formatters.chunks_srt import ChunksSRTFormatter
from segment_aligner.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from segment_aligner.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "chunks_json": ChunksJSONFormatter,
    "chunks_srt": ChunksSRTFormatter,
    "plain_text": PlainTextFormatter,
}
