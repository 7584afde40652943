"""Single-pass segmentation of aligned fragments into paragraphs, lines and words.

WHY: Suno's aligned-lyrics response is a flat fragment array. The lyric's
layout (verse breaks, line breaks, word gaps) survives only as whitespace
and newline markers glued onto the end of fragment text. Karaoke display
needs that layout back as a tree.

HOW: One forward pass over the records. Each fragment is cleaned at its
head, its tail is inspected for a boundary marker, the marker is stripped
and recorded as a flag on the char, and the char is appended to the
currently open word. When the boundary calls for it, a new paragraph, line
or word is opened so the *next* fragment lands in it.

RULES:
- Boundary checks are mutually exclusive, first match wins:
  "\\n\\n" (paragraph) → "\\n" (line) → "\\u3000" (full-width space) → " " (space)
- Paragraph and line breaks only open a container when another record
  follows, so a trailing break never leaves an empty paragraph or line
- A full-width space is a line break: it opens a new line under the same guard
- "\\n" and "\\u3000" set ends_line; " " sets ends_with_inline_space
- With split_words, a space also opens a new word (same guard), except
  while a bracket annotation in the current word is still open
- A fragment made only of boundary markers is kept as an empty-text char
  so its timestamps and flags still reach the builder
- Bracket annotations are NOT removed here; see core.cleanup
"""

from __future__ import annotations

import enum
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from suno_timeline.core.cleanup import has_open_annotation
from suno_timeline.core.ir import AnnotatedChar, CharBucket, CharRecord, SegmentedLyric

FULL_WIDTH_SPACE = "　"

_LEADING_NEWLINES_RE = re.compile(r"^\n+")


class Boundary(enum.Enum):
    """Boundary marker found at the tail of a fragment."""

    PARAGRAPH = "\n\n"
    LINE = "\n"
    FULL_WIDTH_SPACE = FULL_WIDTH_SPACE
    SPACE = " "


# Order matters: "\n\n" must be tested before "\n".
_BOUNDARY_ORDER = (
    Boundary.PARAGRAPH,
    Boundary.LINE,
    Boundary.FULL_WIDTH_SPACE,
    Boundary.SPACE,
)


class _TreeBuilder:
    """Accumulator tree with an explicit "open X" operation per level.

    There is always exactly one open paragraph, line and word: the last
    element at each level.
    """

    def __init__(self) -> None:
        self.paragraphs: SegmentedLyric = []
        self._word: CharBucket = []
        self.open_paragraph()

    def open_paragraph(self) -> None:
        self.paragraphs.append([])
        self.open_line()

    def open_line(self) -> None:
        self.paragraphs[-1].append([])
        self.open_word()

    def open_word(self) -> None:
        self._word = []
        self.paragraphs[-1][-1].append(self._word)

    def append(self, char: AnnotatedChar) -> None:
        self._word.append(char)

    def word_text(self) -> str:
        """Text of the open word, with inline spaces put back."""
        return "".join(
            char.text + (" " if char.ends_with_inline_space else "") for char in self._word
        )


def clean_fragment_head(text: str) -> str:
    """Strip stray leading whitespace and newlines from a fragment.

    Fragments made only of whitespace are returned unchanged apart from
    leading newlines, so a lone " " or "\\u3000" still reads as a boundary.
    Inline whitespace behind a leading newline ("\\n lo") is trimmed too.
    """
    if text.strip():
        return text.lstrip()
    return _LEADING_NEWLINES_RE.sub("", text)


def detect_boundary(text: str) -> Tuple[Optional[Boundary], str]:
    """Find the boundary marker at the tail of ``text``.

    Returns:
        (boundary, text with the marker removed), or (None, text) when the
        fragment has no trailing marker.
    """
    for boundary in _BOUNDARY_ORDER:
        if text.endswith(boundary.value):
            return boundary, text[: -len(boundary.value)]
    return None, text


def annotate(record: CharRecord) -> Tuple[AnnotatedChar, Optional[Boundary]]:
    """Turn one record into an AnnotatedChar and report its boundary."""
    char = AnnotatedChar.from_record(record)
    boundary, char.text = detect_boundary(clean_fragment_head(char.text))
    if boundary in (Boundary.LINE, Boundary.FULL_WIDTH_SPACE):
        char.ends_line = True
    elif boundary is Boundary.SPACE:
        char.ends_with_inline_space = True
    return char, boundary


def segment(
    records: Iterable[CharRecord],
    split_words: bool = True,
) -> SegmentedLyric:
    """Segment a flat record stream into paragraph → line → word buckets.

    Args:
        records: Ordered aligned fragments. May be empty.
        split_words: Open a new word bucket after every plain space boundary
            that is not inside an open bracket annotation. When False, word
            buckets are only seeded when a line or paragraph opens.

    Returns:
        The accumulator tree. Empty input yields ``[[[[]]]]``: one
        paragraph holding one line holding one empty word.
    """
    items: Sequence[CharRecord] = list(records)
    tree = _TreeBuilder()

    for index, record in enumerate(items):
        char, boundary = annotate(record)
        has_next = index + 1 < len(items)

        # The char closes the container that was open when it was read.
        tree.append(char)

        if not has_next or boundary is None:
            continue
        if boundary is Boundary.PARAGRAPH:
            tree.open_paragraph()
        elif boundary in (Boundary.LINE, Boundary.FULL_WIDTH_SPACE):
            tree.open_line()
        elif split_words and not has_open_annotation(tree.word_text()):
            tree.open_word()

    return tree.paragraphs


def count_chars(paragraphs: SegmentedLyric) -> int:
    """Total number of chars held in the tree."""
    return sum(len(word) for paragraph in paragraphs for line in paragraph for word in line)


def flatten(paragraphs: SegmentedLyric) -> List[AnnotatedChar]:
    return [char for paragraph in paragraphs for line in paragraph for word in line for char in word]
