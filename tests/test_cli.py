"""Tests for the command-line interface.

WHY: The CLI is the main way users run the converter on saved Suno
payloads. Output naming, conflict avoidance and error exits must hold.

HOW: main() is called with explicit argv against files in tmp_path.
Errors are observed as SystemExit codes plus stderr text via capsys.
"""

import json

import pytest

from suno_timeline.cli import _resolve_output_path, build_parser, main


@pytest.fixture
def payload_file(tmp_path, sample_aligned_words):
    path = tmp_path / "song.json"
    path.write_text(json.dumps({"aligned_words": sample_aligned_words}), encoding="utf-8")
    return path


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["song.json"])
        assert args.input_file == "song.json"
        assert args.resource_id is None
        assert args.formats is None
        assert args.offset == 0.0
        assert args.split_words is True

    def test_no_split_words(self):
        args = build_parser().parse_args(["song.json", "--no-split-words"])
        assert args.split_words is False


class TestRun:

    def test_writes_all_formats(self, payload_file, tmp_path):
        main([str(payload_file)])
        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == [
            "song-lyrics.lrc",
            "song-lyrics.srt",
            "song-lyrics.txt",
            "song-timeline.json",
            "song.json",
        ]
        data = json.loads((tmp_path / "song-timeline.json").read_text(encoding="utf-8"))
        assert data["resourceID"] == "song"

    def test_selected_formats_and_options(self, payload_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([
            str(payload_file),
            "--formats", "timeline_json, plain_text",
            "--output-dir", str(out_dir),
            "--resource-id", "abc",
            "--offset", "1.5",
            "--no-split-words",
        ])
        assert sorted(p.name for p in out_dir.iterdir()) == ["song-lyrics.txt", "song-timeline.json"]
        data = json.loads((out_dir / "song-timeline.json").read_text(encoding="utf-8"))
        assert data["resourceID"] == "abc"
        first = data["paragraphs"][0]["lines"][0]["words"][0]
        assert first["text"] == "Hello world"
        assert first["begin"] == pytest.approx(2.0)

    def test_conflicting_output_gets_counter(self, payload_file, tmp_path):
        main([str(payload_file), "--formats", "lrc"])
        main([str(payload_file), "--formats", "lrc"])
        assert (tmp_path / "song-lyrics.lrc").is_file()
        assert (tmp_path / "song-lyrics-2.lrc").is_file()

    def test_status_goes_to_stderr(self, payload_file, capsys):
        main([str(payload_file), "--formats", "plain_text"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Done! Saved 1 file(s)" in captured.err


class TestErrors:

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.json")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_unknown_format(self, payload_file, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(payload_file), "--formats", "midi"])
        assert exc.value.code == 1
        assert "Unknown format 'midi'" in capsys.readouterr().err

    def test_missing_output_dir(self, payload_file, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main([str(payload_file), "--output-dir", str(tmp_path / "missing")])
        assert exc.value.code == 1

    def test_invalid_payload(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"word": "a"}]), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "Invalid aligned words" in capsys.readouterr().err


class TestOutputPath:

    def test_no_conflict(self, tmp_path):
        assert _resolve_output_path("song", "-lyrics.lrc", tmp_path) == tmp_path / "song-lyrics.lrc"

    def test_counter_increments(self, tmp_path):
        (tmp_path / "song-lyrics.lrc").write_text("")
        (tmp_path / "song-lyrics-2.lrc").write_text("")
        assert _resolve_output_path("song", "-lyrics.lrc", tmp_path) == tmp_path / "song-lyrics-3.lrc"
