"""Command-line interface for the segment aligner.

WHY: Content is prepared offline: a transcript comes back from the
captioning provider, gets chunked for shadowing, and the chunk files are
uploaded with the lesson. The CLI wires the adapter, the chunker and the
exporters behind one command, and exposes the locator and the sentence
splitter for checking transcripts by hand.

HOW: argparse with three subcommands:
  chunk: transcript JSON (or prose with --text) → exporter files
  locate: transcript JSON + playback time → ActiveLocation as JSON
  sentences: prose → one practice (or --story) sentence per line
Status messages go to stderr; results go to files or stdout.

RULES:
- ``-`` as INPUT reads stdin; ``chunk -`` prints chunk JSON to stdout
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-chunks-2.srt)
- Word limits come from the environment (see config) unless given as flags
- Exit codes: 0 = success, 1 = error
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from segment_aligner.adapters.transcript_adapter import (
    parse_transcript,
    segments_from_text,
    try_parse_json,
)
from segment_aligner.config import load_chunk_limits, load_practice_limits
from segment_aligner.core.chunker import chunk_transcript
from segment_aligner.core.ir import ChunkedTranscript, Segment
from segment_aligner.core.locator import locate, word_states
from segment_aligner.core.sentences import split_into_sentences, split_story_sentences
from segment_aligner.formatters import FORMATTERS
from segment_aligner.formatters.base import FormatterOutput
from segment_aligner.formatters.chunks_json import build_chunks_document


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. episode-chunks.srt)
    - Conflict: counter inserted before the extension (episode-chunks-2.srt)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name, suffix_ext = suffix[:dot_idx], suffix[dot_idx:]
    else:
        suffix_name, suffix_ext = suffix, ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _resolve_limits(
    args: argparse.Namespace,
    defaults: Tuple[int, int],
) -> Tuple[int, int]:
    min_words = args.min_words if args.min_words is not None else defaults[0]
    max_words = args.max_words if args.max_words is not None else defaults[1]
    return min_words, max_words


def _load_segments(raw: str, as_text: bool, start: Optional[float], end: Optional[float]) -> List[Segment]:
    if as_text:
        return segments_from_text(raw, start, end)
    return parse_transcript(try_parse_json(raw))


def _parse_format_keys(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    unknown = [k for k in keys if k not in FORMATTERS]
    if unknown:
        raise ValueError(
            "Unknown format(s): {}. Available: {}".format(
                ", ".join(unknown), ", ".join(sorted(FORMATTERS.keys()))
            )
        )
    return keys


def _run_chunk(args: argparse.Namespace) -> None:
    min_words, max_words = _resolve_limits(args, load_chunk_limits())
    format_keys = _parse_format_keys(args.formats)

    segments = _load_segments(_read_input(args.input), args.text, args.start, args.end)
    chunks = chunk_transcript(segments, min_words, max_words)

    source_name = "stdin" if args.input == "-" else Path(args.input).name
    transcript = ChunkedTranscript(source_filename=source_name, chunks=tuple(chunks))
    _status("Chunked {} segments into {} chunks ({}-{} words)".format(
        len(segments), len(chunks), min_words, max_words
    ))

    if args.input == "-":
        print(json.dumps(build_chunks_document(transcript), ensure_ascii=False, indent=2))
        return

    input_path = Path(args.input).resolve()
    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        raise ValueError("Output directory does not exist: {}".format(output_dir))

    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(transcript):
            path = _save_output(output, input_path.stem, output_dir)
            _status("Wrote {} ({})".format(path, formatter.name))


def _run_locate(args: argparse.Namespace) -> None:
    segments = parse_transcript(try_parse_json(_read_input(args.input)))
    location = locate(segments, args.time)

    states = []  # type: List[str]
    if location.segment_index is not None:
        states = [s.value for s in word_states(segments[location.segment_index], location)]

    print(json.dumps({
        "segment_index": location.segment_index,
        "word_index": location.word_index,
        "in_gap": location.in_gap,
        "word_states": states,
    }, indent=2))


def _run_sentences(args: argparse.Namespace) -> None:
    text = _read_input(args.input)
    if args.story:
        sentences = split_story_sentences(text)
    else:
        min_words, max_words = _resolve_limits(args, load_practice_limits())
        sentences = split_into_sentences(text, min_words, max_words)
    for sentence in sentences:
        print(sentence)
    _status("{} sentences".format(len(sentences)))


def _add_limit_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--min-words", type=int, default=None,
                        help="Minimum words per unit (default: from environment).")
    parser.add_argument("--max-words", type=int, default=None,
                        help="Maximum words per unit (default: from environment).")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect it without running
    a command.
    """
    parser = argparse.ArgumentParser(
        prog="segment_aligner",
        description="Chunk timed transcripts for shadowing practice and locate "
                    "playback times within them.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    chunk = subparsers.add_parser("chunk", help="Chunk a transcript into practice phrases.")
    chunk.add_argument("input", help="Transcript JSON file, or '-' for stdin.")
    chunk.add_argument("--text", action="store_true",
                       help="Treat the input as plain prose instead of JSON.")
    chunk.add_argument("--start", type=float, default=None,
                       help="Start time of the prose in seconds (with --text).")
    chunk.add_argument("--end", type=float, default=None,
                       help="End time of the prose in seconds (with --text).")
    chunk.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )
    chunk.add_argument("--output-dir", default=None,
                       help="Directory to save output files (default: next to the input).")
    _add_limit_flags(chunk)
    chunk.set_defaults(handler=_run_chunk)

    locate_cmd = subparsers.add_parser("locate", help="Find the active segment and word at a time.")
    locate_cmd.add_argument("input", help="Transcript JSON file, or '-' for stdin.")
    locate_cmd.add_argument("time", help="Playback time in seconds.")
    locate_cmd.set_defaults(handler=_run_locate)

    sentences = subparsers.add_parser("sentences", help="Split prose into practice sentences.")
    sentences.add_argument("input", help="Text file, or '-' for stdin.")
    sentences.add_argument("--story", action="store_true",
                           help="Plain sentence split for shadowing (no word limits).")
    _add_limit_flags(sentences)
    sentences.set_defaults(handler=_run_sentences)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.handler(args)
    except (ValueError, OSError) as exc:
        _fail(str(exc))


if __name__ == "__main__":
    main()
