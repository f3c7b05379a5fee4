"""Adapter: transcript JSON to segment IR.

WHY: Transcripts arrive from several captioning and speech-to-text
providers, each with its own field names. Some deliver sentences with
nested word timestamps, some only sentence spans, some a flat word list.
The chunker and the locator only understand the segment IR, so this
module normalises everything into it.

HOW: Three steps:
  1. try_parse_json(): tolerant JSON parsing for truncated exports.
  2. Shape validation with jsonschema against transcript.schema.json.
  3. parse_transcript(): maps each entry onto make_segment(), reading
     text from text/word/t, start from start/s and end from end/e.

RULES:
- Accepted shapes: a list of segments, {"segments": [...]}, {"words": [...]},
  or a top-level list of word objects using the word/t keys.
- A segment with a non-empty words list becomes a WordTimedSegment,
  otherwise a PlainSegment (untimed when it carries no start/end).
- Entries with empty text are skipped and logged; they are not an error.
- Shape violations and non-numeric or non-finite times raise ValueError.
- Input data is never modified.
"""

from __future__ import annotations

import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from segment_aligner.core.ir import Segment, TimedWord, make_segment

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "transcript.schema.json"

_CACHED_SCHEMA: Optional[dict] = None

_WORD_ONLY_KEYS = ("word", "t")


def _get_schema() -> dict:
    """Load and cache the transcript input schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def try_parse_json(raw: str) -> Any:
    """Parse JSON, attempting to repair input that was cut off.

    WHY: Transcript files are sometimes copied out of larger exports and
    lose their closing brackets.

    HOW: Try a direct parse; failing that, drop a trailing comma and retry
    with common bracket completions.

    Raises:
        ValueError: If the JSON cannot be parsed even with the repairs.
    """
    raw = raw.replace("\r\n", "\n").replace("\r", "\n").strip()

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    cleaned = re.sub(r",\s*$", "", raw)
    suffixes = ["", "]", "}]", "}]}", "]}", "]}]", "}]}]"]

    for candidate in (cleaned, raw):
        for suffix in suffixes:
            try:
                return json.loads(candidate + suffix)
            except json.JSONDecodeError:
                continue

    raise ValueError("Could not parse JSON input (even with attempted fixes)")


def _text_of(item: Dict[str, Any]) -> str:
    return str(item.get("text", item.get("word", item.get("t", ""))) or "").strip()


def _time_of(item: Dict[str, Any], long_key: str, short_key: str) -> Optional[float]:
    value = item.get(long_key)
    if value is None:
        value = item.get(short_key)
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValueError("Invalid '{}' value: {!r}".format(long_key, value))
    if not math.isfinite(seconds):
        raise ValueError("Invalid '{}' value: {!r}".format(long_key, value))
    return seconds


def _parse_word(item: Dict[str, Any]) -> Optional[TimedWord]:
    text = _text_of(item)
    if not text:
        logger.warning("Skipping word entry with empty text: %r", item)
        return None
    start = _time_of(item, "start", "s")
    if start is None:
        start = 0.0
    end = _time_of(item, "end", "e")
    if end is None:
        end = start
    return TimedWord(text=text, start=start, end=end)


def _parse_words(items: List[Dict[str, Any]]) -> List[TimedWord]:
    words = []
    for item in items:
        word = _parse_word(item)
        if word is not None:
            words.append(word)
    return words


def _is_flat_word_list(items: List[Dict[str, Any]]) -> bool:
    if not items or any("words" in item for item in items):
        return False
    return any(key in item for item in items for key in _WORD_ONLY_KEYS)


def parse_transcript(data: Any) -> List[Segment]:
    """Normalise transcript JSON into a list of segments.

    Args:
        data: Parsed JSON (see module RULES for the accepted shapes).

    Returns:
        Segments in input order.

    Raises:
        ValueError: If the data does not match the transcript schema or a
            time value is not a finite number.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        raise ValueError("Transcript JSON does not match the expected shape: {}".format(exc.message))

    if isinstance(data, dict) and "segments" in data:
        items = data["segments"]
    elif isinstance(data, dict):
        items = [{"words": data["words"]}]
    elif _is_flat_word_list(data):
        items = [{"words": data}]
    else:
        items = data

    segments = []  # type: List[Segment]
    for item in items:
        words = _parse_words(item.get("words") or [])
        text = _text_of(item)
        if not text and not words:
            logger.warning("Skipping segment with no text and no words")
            continue
        segments.append(make_segment(
            text=text,
            start=_time_of(item, "start", "s"),
            end=_time_of(item, "end", "e"),
            words=words,
        ))

    logger.debug("Parsed %d segments", len(segments))
    return segments


def segments_from_text(text: str, start: Optional[float] = None, end: Optional[float] = None) -> List[Segment]:
    """Wrap plain prose in a single plain segment (empty list for blank text)."""
    if not text or not text.strip():
        return []
    return [make_segment(text=" ".join(text.split()), start=start, end=end)]
