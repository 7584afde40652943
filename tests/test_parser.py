"""Tests for SunoParser and the Lyric initialiser.

WHY: ``parse`` is the public entry point. It must pass the resource id and
duration through, apply the offset, and hand lines and paragraphs to the
injected tokenizers, whose failures must surface to the caller.

HOW: Async entry points are driven with asyncio.run(). Tokenizers are
plain functions or coroutines recording what they were given.
"""

import asyncio

import pytest

from suno_timeline.core.builder import counter_id_factory
from suno_timeline.core.ir import CharRecord, WordTimeline
from suno_timeline.core.lyric import Lyric, join_words
from suno_timeline.core.parser import SunoParser


def _parse(records, resource_id="song", **kwargs):
    kwargs.setdefault("id_factory", counter_id_factory())
    return asyncio.run(SunoParser(**kwargs).parse(records, resource_id))


class TestParse:

    def test_resource_id_and_duration(self, sample_lyric):
        assert sample_lyric.resource_id == "7fcebd38-00b7-4c9a-9eba-1df4af210e48"
        assert sample_lyric.duration_s == 0
        assert sample_lyric.initialized is True

    def test_sample_structure(self, sample_lyric):
        assert len(sample_lyric.paragraphs) == 2
        assert [len(p.lines) for p in sample_lyric.paragraphs] == [2, 2]
        assert len(sample_lyric.words()) == 6

    def test_no_section_labels_survive(self, sample_lyric):
        labels = ("verse", "chorus")
        assert not [w for w in sample_lyric.words() if any(label in w.text.lower() for label in labels)]

    def test_sample_text(self, sample_lyric):
        assert sample_lyric.text() == "Hello world\nsing along\n\nLa la"

    def test_accepts_raw_dicts(self, sample_aligned_words):
        lyric = _parse(sample_aligned_words)
        assert [w.text for w in lyric.words()] == ["Hello", "world", "sing", "along", "La", "la"]

    def test_split_words_off(self, sample_records):
        lyric = _parse(sample_records, split_words=False)
        assert [w.text for w in lyric.words()] == ["Hello world", "sing along", "La la"]
        assert lyric.text() == "Hello world\nsing along\n\nLa la"

    def test_empty_input(self):
        lyric = _parse([])
        assert len(lyric.paragraphs) == 1
        assert len(lyric.paragraphs[0].lines) == 1
        assert lyric.words() == []
        assert lyric.text() == ""

    def test_duration_passed_through(self):
        lyric = _parse([CharRecord("a", 0.0, 1.0)], duration_s=180.5)
        assert lyric.duration_s == 180.5

    def test_build_timeline_is_synchronous(self, sample_records):
        timeline = SunoParser(id_factory=counter_id_factory()).build_timeline(sample_records)
        assert timeline[0][0][0].word_id == "word-1"
        assert timeline[0][0][0].begin == 0.5


class TestOffset:

    def test_offset_applied_to_every_word(self, sample_records):
        lyric = _parse(sample_records, offset_s=10.0)
        first = lyric.words()[0]
        assert first.begin == pytest.approx(10.5)
        assert first.end == pytest.approx(11.0)
        assert lyric.offset_s == 10.0

    def test_source_timeline_not_mutated(self):
        word = WordTimeline(word_id="w", begin=1.0, end=2.0, text="a")
        lyric = asyncio.run(Lyric("r", 0.0, [[[word]]], offset_s=1.0).init())
        assert lyric.words()[0].begin == 2.0
        assert word.begin == 1.0


class TestTokenizers:

    def test_sync_line_tokenizer(self, sample_records):
        seen = []

        def tokenizer(text):
            seen.append(text)
            return text.split(" ")

        lyric = _parse(sample_records, tokenizer=tokenizer)
        assert seen == ["Hello world", "sing along", "La la"]
        assert lyric.paragraphs[0].lines[0].tokens == ["Hello", "world"]
        # The label-only line has no words and is not tokenized
        assert lyric.paragraphs[1].lines[0].tokens is None

    def test_async_paragraph_tokenizer(self, sample_records):
        async def tokenizer(text):
            await asyncio.sleep(0)
            return [text.upper()]

        lyric = _parse(sample_records, paragraph_tokenizer=tokenizer)
        assert lyric.paragraphs[0].tokens == ["HELLO WORLD\nSING ALONG"]
        assert lyric.paragraphs[1].tokens == ["LA LA"]

    def test_tokenizer_error_propagates(self, sample_records):
        def tokenizer(text):
            raise RuntimeError("dictionary missing")

        with pytest.raises(RuntimeError, match="dictionary missing"):
            _parse(sample_records, tokenizer=tokenizer)

    def test_init_is_idempotent(self):
        calls = []
        lyric = Lyric("r", 0.0, [[[WordTimeline("w", 0.0, 1.0, "a")]]], tokenizer=lambda t: calls.append(t) or [t])
        asyncio.run(lyric.init())
        asyncio.run(lyric.init())
        assert calls == ["a"]


class TestLyricViews:

    def test_timelines_nested(self, sample_lyric):
        timelines = sample_lyric.timelines()
        assert [[len(line) for line in p] for p in timelines] == [[2, 2], [0, 2]]

    def test_line_bounds(self, sample_lyric):
        line = sample_lyric.paragraphs[0].lines[1]
        assert line.begin == 1.6
        assert line.end == 2.4
        assert sample_lyric.paragraphs[1].lines[0].begin is None

    def test_join_words_respects_whitespace_flag(self):
        words = [
            WordTimeline("1", 0, 1, "ラ", has_whitespace=False),
            WordTimeline("2", 1, 2, "ラ", has_whitespace=True),
            WordTimeline("3", 2, 3, "ラ", has_whitespace=True),
        ]
        assert join_words(words) == "ララ ラ"
