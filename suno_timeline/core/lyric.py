"""Lyric object initialised from a built timeline.

WHY: The timeline builder stops at a plain nested list. Players and
formatters want a lyric object with a resource id, a duration, an
optional playback offset, per-line text and, for languages without
spaces, linguistic tokens. Tokenisation may be slow or remote, so it is
injected and awaited here rather than inside the converter core.

HOW: Lyric wraps the timeline in LyricParagraph / LyricLine views. The
async ``init()`` applies the offset to every word and awaits the line and
paragraph tokenizers, storing their output on each line and paragraph.

RULES:
- The incoming timeline is never mutated; offset words are copies
- duration_s is whatever the caller passed; it is never computed here
- Tokenizers may be sync or async: ``tokenize(text) -> Sequence[str]``
- Tokenizer exceptions propagate out of ``init()`` unchanged
- Empty lines survive as LyricLine objects with no words
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from suno_timeline.core.ir import LineTimeline, Timeline, WordTimeline

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], Union[Sequence[str], Awaitable[Sequence[str]]]]


async def _run_tokenizer(tokenizer: Tokenizer, text: str) -> List[str]:
    result = tokenizer(text)
    if inspect.isawaitable(result):
        result = await result
    return list(result)


def join_words(words: Sequence[WordTimeline]) -> str:
    """Join word texts, with a space after each word that had one."""
    parts: List[str] = []
    for i, word in enumerate(words):
        parts.append(word.text)
        if word.has_whitespace and i < len(words) - 1:
            parts.append(" ")
    return "".join(parts)


@dataclass
class LyricLine:
    words: List[WordTimeline] = field(default_factory=list)
    tokens: Optional[List[str]] = None

    @property
    def begin(self) -> Optional[float]:
        return self.words[0].begin if self.words else None

    @property
    def end(self) -> Optional[float]:
        return self.words[-1].end if self.words else None

    def text(self) -> str:
        return join_words(self.words)


@dataclass
class LyricParagraph:
    lines: List[LyricLine] = field(default_factory=list)
    tokens: Optional[List[str]] = None

    def text(self) -> str:
        return "\n".join(line.text() for line in self.lines if line.words)


class Lyric:
    """A karaoke lyric built from a timeline.

    Call ``await lyric.init()`` before reading it; the constructor only
    stores its arguments.

    Args:
        resource_id: Opaque id of the source track, passed through.
        duration_s: Track duration supplied by the caller.
        timelines: Output of the timeline builder.
        offset_s: Seconds added to every word's begin and end.
        tokenizer: Line-level tokenizer, awaited once per non-empty line.
        paragraph_tokenizer: Paragraph-level tokenizer, awaited once per
            non-empty paragraph.
    """

    def __init__(
        self,
        resource_id: str,
        duration_s: float,
        timelines: Timeline,
        offset_s: float = 0.0,
        tokenizer: Optional[Tokenizer] = None,
        paragraph_tokenizer: Optional[Tokenizer] = None,
    ) -> None:
        self.resource_id = resource_id
        self.duration_s = duration_s
        self.offset_s = offset_s
        self.tokenizer = tokenizer
        self.paragraph_tokenizer = paragraph_tokenizer
        self._source = timelines
        self.paragraphs: List[LyricParagraph] = []
        self.initialized = False

    async def init(self) -> Lyric:
        if self.initialized:
            return self

        paragraphs: List[LyricParagraph] = []
        for paragraph in self._source:
            lines = [LyricLine(words=self._shift(line)) for line in paragraph]
            paragraphs.append(LyricParagraph(lines=lines))

        if self.tokenizer is not None:
            for paragraph in paragraphs:
                for line in paragraph.lines:
                    if line.words:
                        line.tokens = await _run_tokenizer(self.tokenizer, line.text())

        if self.paragraph_tokenizer is not None:
            for paragraph in paragraphs:
                text = paragraph.text()
                if text:
                    paragraph.tokens = await _run_tokenizer(self.paragraph_tokenizer, text)

        self.paragraphs = paragraphs
        self.initialized = True
        logger.debug(
            "Initialised lyric %s: %d paragraphs, %d words",
            self.resource_id, len(paragraphs), len(self.words()),
        )
        return self

    def _shift(self, line: LineTimeline) -> List[WordTimeline]:
        if not self.offset_s:
            return [replace(word) for word in line]
        return [
            replace(word, begin=word.begin + self.offset_s, end=word.end + self.offset_s)
            for word in line
        ]

    def timelines(self) -> Timeline:
        """Nested word timelines (paragraph → line → word), offset applied."""
        return [[list(line.words) for line in paragraph.lines] for paragraph in self.paragraphs]

    def lines(self) -> List[LyricLine]:
        return [line for paragraph in self.paragraphs for line in paragraph.lines]

    def words(self) -> List[WordTimeline]:
        return [word for line in self.lines() for word in line.words]

    def text(self) -> str:
        """Display text: lines joined by newlines, paragraphs by a blank line."""
        return "\n\n".join(p.text() for p in self.paragraphs if p.text())
