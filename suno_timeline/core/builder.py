"""Timeline assembly from the segmenter's accumulator tree.

WHY: The segmenter leaves chars in nested buckets with per-char flags.
Karaoke consumers want one timed entry per word with display text, and
the same paragraph/line nesting around it.

HOW: Walk the tree bottom-up. Each non-empty word bucket becomes one
WordTimeline: timing from its first and last char, text from the joined
chars (a space re-inserted after every char flagged with an inline space)
passed through core.cleanup, flags OR-ed across chars. Lines and
paragraphs are plain structural maps.

RULES:
- Zero-char word buckets are dropped
- Buckets whose text was made only of annotations (non-empty before
  cleanup, empty after) are dropped too
- Empty lines are kept as empty lists; they are never pruned
- begin/end are taken as-is: no clamping, no cross-word correction
- Word ids come from the injected id_factory, one call per emitted word
"""

from __future__ import annotations

import itertools
import uuid
from typing import Callable, Optional

from suno_timeline.core.cleanup import clean_word_text
from suno_timeline.core.ir import (
    CharBucket,
    LineBuckets,
    LineTimeline,
    ParagraphBuckets,
    ParagraphTimeline,
    SegmentedLyric,
    Timeline,
    WordTimeline,
)

IdFactory = Callable[[], str]


def uuid_id_factory() -> str:
    """Default word id generator: random UUID v4."""
    return str(uuid.uuid4())


def counter_id_factory(prefix: str = "word-", start: int = 1) -> IdFactory:
    """Deterministic id generator ("word-1", "word-2", ...) for tests and fixtures."""
    counter = itertools.count(start)
    return lambda: "{}{}".format(prefix, next(counter))


def join_char_text(word: CharBucket) -> str:
    """Concatenate char texts, re-inserting one space after inline-space chars."""
    parts = []
    for char in word:
        parts.append(char.text)
        if char.ends_with_inline_space:
            parts.append(" ")
    return "".join(parts)


class TimelineBuilder:
    """Builds WordTimeline trees with a fixed id generator.

    Args:
        id_factory: Zero-argument callable returning a fresh unique id.
            Defaults to UUID v4.
    """

    def __init__(self, id_factory: Optional[IdFactory] = None) -> None:
        self.id_factory = id_factory or uuid_id_factory

    def build(self, paragraphs: SegmentedLyric) -> Timeline:
        return [self.build_paragraph(paragraph) for paragraph in paragraphs]

    def build_paragraph(self, paragraph: ParagraphBuckets) -> ParagraphTimeline:
        # Lines are kept even when every word in them was pruned
        return [self.build_line(line) for line in paragraph]

    def build_line(self, line: LineBuckets) -> LineTimeline:
        words: LineTimeline = []
        for bucket in line:
            word = self.build_word(bucket)
            if word is not None:
                words.append(word)
        return words

    def build_word(self, word: CharBucket) -> Optional[WordTimeline]:
        """Assemble one word bucket, or return None when it must be pruned."""
        if not word:
            return None

        raw_text = join_char_text(word)
        text = clean_word_text(raw_text)
        if raw_text.strip() and not text:
            return None

        return WordTimeline(
            word_id=self.id_factory(),
            begin=word[0].start_s,
            end=word[-1].end_s,
            text=text,
            has_new_line=any(char.ends_line for char in word),
            has_whitespace=any(char.ends_with_inline_space for char in word),
        )


def build(
    paragraphs: SegmentedLyric,
    id_factory: Optional[IdFactory] = None,
) -> Timeline:
    """Build the output timeline from a segmented accumulator tree."""
    return TimelineBuilder(id_factory).build(paragraphs)
