"""Tests for the segment_aligner command-line interface.

WHY: Lesson preparation is scripted around the CLI. Output naming,
conflict handling and exit codes must stay stable so batch scripts do
not overwrite earlier exports or miss failures.

HOW: main() is called with an explicit argv. Files live under tmp_path;
stdout/stderr are captured with capsys and stdin is replaced with
monkeypatch.

RULES:
- Never shell out; always call main(argv) in-process
- Errors are asserted through SystemExit codes and the stderr message
"""

import io
import json

import pytest

from segment_aligner.cli import build_parser, main
from tests.conftest import SAMPLE_TRANSCRIPT_JSON


@pytest.fixture
def transcript_file(tmp_path):
    path = tmp_path / "lesson.json"
    path.write_text(json.dumps(SAMPLE_TRANSCRIPT_JSON, ensure_ascii=False), encoding="utf-8")
    return path


class TestParser:

    def test_command_required(self):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args([])
        assert excinfo.value.code == 2

    def test_chunk_defaults(self):
        args = build_parser().parse_args(["chunk", "in.json"])
        assert args.formats is None
        assert args.output_dir is None
        assert args.min_words is None
        assert args.max_words is None
        assert not args.text


class TestChunkCommand:

    def test_writes_all_formats_next_to_input(self, transcript_file, capsys):
        main(["chunk", str(transcript_file)])
        folder = transcript_file.parent
        assert (folder / "lesson-chunks.json").exists()
        assert (folder / "lesson-chunks.srt").exists()
        assert (folder / "lesson-chunks.txt").exists()
        err = capsys.readouterr().err
        assert "Chunked 2 segments into 3 chunks (3-10 words)" in err

    def test_json_content(self, transcript_file):
        main(["chunk", str(transcript_file), "--formats", "chunks_json"])
        document = json.loads((transcript_file.parent / "lesson-chunks.json").read_text(encoding="utf-8"))
        assert document["source"] == "lesson.json"
        assert [c["segment_index"] for c in document["chunks"]] == [0, 1, 1]

    def test_selected_formats_only(self, transcript_file):
        main(["chunk", str(transcript_file), "--formats", "chunks_srt"])
        outputs = sorted(p.name for p in transcript_file.parent.iterdir())
        assert outputs == ["lesson-chunks.srt", "lesson.json"]

    def test_conflict_gets_numeric_suffix(self, transcript_file):
        main(["chunk", str(transcript_file), "--formats", "chunks_srt"])
        main(["chunk", str(transcript_file), "--formats", "chunks_srt"])
        main(["chunk", str(transcript_file), "--formats", "chunks_srt"])
        folder = transcript_file.parent
        assert (folder / "lesson-chunks-2.srt").exists()
        assert (folder / "lesson-chunks-3.srt").exists()

    def test_output_dir(self, transcript_file, tmp_path):
        out = tmp_path / "exports"
        out.mkdir()
        main(["chunk", str(transcript_file), "--output-dir", str(out), "--formats", "plain_text"])
        assert (out / "lesson-chunks.txt").read_text(encoding="utf-8").startswith("01  00:00 – 00:01  Hola,")

    def test_custom_limits(self, transcript_file, capsys):
        main(["chunk", str(transcript_file), "--formats", "chunks_json", "--min-words", "2", "--max-words", "4"])
        assert "(2-4 words)" in capsys.readouterr().err

    def test_stdin_prints_json(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(SAMPLE_TRANSCRIPT_JSON)))
        main(["chunk", "-"])
        document = json.loads(capsys.readouterr().out)
        assert document["source"] == "stdin"
        assert document["chunk_count"] == 3

    def test_text_input(self, tmp_path):
        path = tmp_path / "story.txt"
        path.write_text("A B C D E F G H I J K.", encoding="utf-8")
        main(["chunk", str(path), "--text", "--start", "0", "--end", "11", "--formats", "chunks_json"])
        document = json.loads((tmp_path / "story-chunks.json").read_text(encoding="utf-8"))
        assert [c["text"] for c in document["chunks"]] == ["A B C D E F G H I J", "K."]
        assert document["chunks"][1]["start"] == pytest.approx(10.0)
        assert document["chunks"][1]["end"] == pytest.approx(11.0)

    def test_environment_limits(self, transcript_file, monkeypatch, capsys):
        monkeypatch.setenv("ALIGNER_CHUNK_MAX_WORDS", "6")
        main(["chunk", str(transcript_file), "--formats", "chunks_json"])
        assert "(3-6 words)" in capsys.readouterr().err


class TestChunkErrors:

    def _exit_code(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        return excinfo.value.code

    def test_unknown_format(self, transcript_file, capsys):
        assert self._exit_code(["chunk", str(transcript_file), "--formats", "docx"]) == 1
        assert "Error: Unknown format(s): docx" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert self._exit_code(["chunk", str(tmp_path / "nope.json")]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_missing_output_dir(self, transcript_file, tmp_path, capsys):
        assert self._exit_code(["chunk", str(transcript_file), "--output-dir", str(tmp_path / "nope")]) == 1
        assert "Output directory does not exist" in capsys.readouterr().err

    def test_invalid_limits(self, transcript_file):
        assert self._exit_code(["chunk", str(transcript_file), "--min-words", "5", "--max-words", "4"]) == 1

    def test_invalid_environment_limit(self, transcript_file, monkeypatch, capsys):
        monkeypatch.setenv("ALIGNER_CHUNK_MIN_WORDS", "three")
        assert self._exit_code(["chunk", str(transcript_file)]) == 1
        assert "ALIGNER_CHUNK_MIN_WORDS must be an integer" in capsys.readouterr().err

    def test_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("this is not json", encoding="utf-8")
        assert self._exit_code(["chunk", str(path)]) == 1

    def test_non_finite_time_writes_nothing(self, tmp_path, capsys):
        path = tmp_path / "nan.json"
        path.write_text('[{"word": "hola", "s": "nan", "e": "nan"}]', encoding="utf-8")
        assert self._exit_code(["chunk", str(path)]) == 1
        assert "Invalid 'start' value" in capsys.readouterr().err
        assert not (tmp_path / "nan-chunks.json").exists()

    def test_wrong_shape(self, tmp_path, capsys):
        path = tmp_path / "shape.json"
        path.write_text('{"items": []}', encoding="utf-8")
        assert self._exit_code(["chunk", str(path)]) == 1
        assert "does not match the expected shape" in capsys.readouterr().err


class TestLocateCommand:

    def test_active_word(self, transcript_file, capsys):
        main(["locate", str(transcript_file), "0.7"])
        result = json.loads(capsys.readouterr().out)
        assert result == {
            "segment_index": 0,
            "word_index": 1,
            "in_gap": False,
            "word_states": ["past", "active", "upcoming", "upcoming"],
        }

    def test_gap(self, transcript_file, capsys):
        main(["locate", str(transcript_file), "2.2"])
        result = json.loads(capsys.readouterr().out)
        assert result["in_gap"] is True
        assert result["word_states"] == ["past"] * 4

    def test_plain_segment(self, transcript_file, capsys):
        main(["locate", str(transcript_file), "5"])
        result = json.loads(capsys.readouterr().out)
        assert result["segment_index"] == 1
        assert result["word_states"] == []

    def test_no_segment(self, transcript_file, capsys):
        main(["locate", str(transcript_file), "99"])
        result = json.loads(capsys.readouterr().out)
        assert result["segment_index"] is None
        assert result["word_states"] == []

    def test_non_numeric_time_is_zero(self, transcript_file, capsys):
        main(["locate", str(transcript_file), "abc"])
        assert json.loads(capsys.readouterr().out)["word_index"] == 0


class TestSentencesCommand:

    def test_story(self, tmp_path, capsys):
        path = tmp_path / "story.txt"
        path.write_text("Había una vez un gato. Vivía en Madrid! ¿Era feliz?", encoding="utf-8")
        main(["sentences", str(path), "--story"])
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["Había una vez un gato.", "Vivía en Madrid!", "¿Era feliz?"]
        assert "3 sentences" in captured.err

    def test_practice(self, tmp_path, capsys):
        path = tmp_path / "essay.txt"
        path.write_text("Hi there. How are you? I am fine thanks. And you today my friend.", encoding="utf-8")
        main(["sentences", str(path)])
        assert capsys.readouterr().out.splitlines() == [
            "Hi there. How are you? I am fine thanks. And you today my friend."
        ]

    def test_practice_limits_from_flags(self, tmp_path, capsys):
        path = tmp_path / "essay.txt"
        path.write_text("Uno dos. Tres cuatro.", encoding="utf-8")
        main(["sentences", str(path), "--min-words", "1", "--max-words", "2"])
        assert capsys.readouterr().out.splitlines() == ["Uno dos.", "Tres cuatro."]
