"""Suno aligned-lyrics parser: records → segmented tree → timeline → Lyric.

WHY: Callers want one entry point that takes the aligned fragments and a
resource id and hands back an initialised lyric. The segmentation and
assembly steps are synchronous and pure; only the lyric initialiser may
await (for its injected tokenizers), so ``parse`` is async.

HOW: SunoParser holds the injected collaborators (tokenizers, offset, id
factory, word-splitting switch). ``build_timeline`` runs segment() then
TimelineBuilder.build(); ``parse`` wraps the result in a Lyric and awaits
its ``init()``.

RULES:
- Records may be CharRecord objects or raw Suno dicts (word/start_s/end_s)
- duration_s is a caller-supplied placeholder (default 0); never computed
- No per-parser state survives a call; one parser may run concurrently
- Tokenizer errors surface as exceptions from the awaited ``parse``
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Union

from suno_timeline.core.builder import IdFactory, TimelineBuilder
from suno_timeline.core.ir import CharRecord, Timeline
from suno_timeline.core.lyric import Lyric, Tokenizer
from suno_timeline.core.segmenter import count_chars, segment

logger = logging.getLogger(__name__)

RecordLike = Union[CharRecord, dict]


def _coerce_records(records: Iterable[RecordLike]) -> List[CharRecord]:
    return [r if isinstance(r, CharRecord) else CharRecord.from_dict(r) for r in records]


class SunoParser:
    """Converts Suno aligned fragments into a karaoke Lyric.

    Args:
        tokenizer: Optional line-level tokenizer handed to the Lyric.
        paragraph_tokenizer: Optional paragraph-level tokenizer.
        offset_s: Seconds added to every word by the Lyric (default 0).
        split_words: Open a new word bucket at every space boundary.
        id_factory: Word id generator (default UUID v4).
        duration_s: Placeholder duration given to the Lyric.
    """

    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        paragraph_tokenizer: Optional[Tokenizer] = None,
        offset_s: Optional[float] = None,
        split_words: bool = True,
        id_factory: Optional[IdFactory] = None,
        duration_s: float = 0.0,
    ) -> None:
        self.tokenizer = tokenizer
        self.paragraph_tokenizer = paragraph_tokenizer
        self.offset_s = offset_s
        self.split_words = split_words
        self.id_factory = id_factory
        self.duration_s = duration_s

    def build_timeline(self, records: Iterable[RecordLike]) -> Timeline:
        """Run the synchronous core: segment, then assemble."""
        chars = _coerce_records(records)
        paragraphs = segment(chars, split_words=self.split_words)
        timeline = TimelineBuilder(self.id_factory).build(paragraphs)
        logger.debug(
            "Segmented %d records into %d paragraphs (%d chars kept)",
            len(chars), len(paragraphs), count_chars(paragraphs),
        )
        return timeline

    async def parse(self, records: Iterable[Any], resource_id: str) -> Lyric:
        """Build the timeline and return an initialised Lyric.

        Args:
            records: Ordered aligned fragments (CharRecord or raw dicts).
            resource_id: Opaque id passed through to the Lyric.

        Returns:
            The Lyric after ``await init()``.
        """
        timeline = self.build_timeline(records)
        lyric = Lyric(
            resource_id=resource_id,
            duration_s=self.duration_s,
            timelines=timeline,
            offset_s=self.offset_s or 0.0,
            tokenizer=self.tokenizer,
            paragraph_tokenizer=self.paragraph_tokenizer,
        )
        return await lyric.init()
