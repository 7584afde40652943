"""Intermediate representation dataclasses for aligned lyric timelines.

WHY: Suno returns a flat array of aligned fragments with no structure.
Karaoke consumers need paragraphs, lines and words with timing. The IR
gives the segmenter, the timeline builder, the lyric initialiser and the
formatters one well-typed vocabulary to share.

HOW: Three layers of types:
  CharRecord    — one aligned fragment exactly as the source emitted it
  AnnotatedChar — a CharRecord plus the boundary flags found at its tail
  WordTimeline  — one assembled word with timing and cleaned display text
plus nested list aliases for the accumulator tree and the output timeline.

RULES:
- CharRecord is immutable; the segmenter never mutates its input
- Boundary flags live on the char, not on its container
- All times are float seconds, passed through exactly as received
- WordTimeline.word_id is assigned by an injected id factory
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class CharRecord:
    """A single aligned fragment from the Suno aligned-lyrics response.

    WHY: The alignment model emits fragments that are not guaranteed to
    be single characters. A fragment may carry embedded spaces, full-width
    spaces or newlines that encode the lyric's layout.

    RULES:
    - text: raw fragment text, boundary markers included (e.g. "there\\n\\n")
    - start_s / end_s: float seconds, never validated or reordered
    - success / align_prob: alignment metadata, carried through untouched
    """

    text: str
    start_s: float
    end_s: float
    success: bool = True
    align_prob: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CharRecord:
        """Parse a CharRecord from a raw Suno aligned-word dict.

        RULES:
        - word, start_s and end_s are required
        - success defaults to True, p_align to 0.0
        """
        return cls(
            text=data["word"],
            start_s=float(data["start_s"]),
            end_s=float(data["end_s"]),
            success=bool(data.get("success", True)),
            align_prob=float(data.get("p_align", 0.0)),
        )


@dataclass
class AnnotatedChar:
    """A fragment after boundary detection.

    ``text`` has its boundary markers stripped. ``ends_line`` is set when
    the fragment ended with a newline or a full-width space;
    ``ends_with_inline_space`` when it ended with a plain space.
    """

    text: str
    start_s: float
    end_s: float
    success: bool = True
    align_prob: float = 0.0
    ends_line: bool = False
    ends_with_inline_space: bool = False

    @classmethod
    def from_record(cls, record: CharRecord) -> AnnotatedChar:
        return cls(
            text=record.text,
            start_s=record.start_s,
            end_s=record.end_s,
            success=record.success,
            align_prob=record.align_prob,
        )


@dataclass
class WordTimeline:
    """One assembled word ready for karaoke highlighting.

    RULES:
    - begin: start of the first constituent char
    - end: end of the last constituent char (no clamping)
    - text: joined, annotation-stripped, whitespace-collapsed text
    - has_new_line / has_whitespace: OR of the constituent char flags
    """

    word_id: str
    begin: float
    end: float
    text: str
    has_new_line: bool = False
    has_whitespace: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the camelCase keys karaoke players expect."""
        return {
            "wordID": self.word_id,
            "begin": self.begin,
            "end": self.end,
            "text": self.text,
            "hasNewLine": self.has_new_line,
            "hasWhitespace": self.has_whitespace,
        }


# Accumulator tree built by the segmenter
CharBucket = List[AnnotatedChar]
LineBuckets = List[CharBucket]
ParagraphBuckets = List[LineBuckets]
SegmentedLyric = List[ParagraphBuckets]

# Output timeline built by the timeline builder
LineTimeline = List[WordTimeline]
ParagraphTimeline = List[LineTimeline]
Timeline = List[ParagraphTimeline]
