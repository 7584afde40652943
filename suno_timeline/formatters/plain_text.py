"""Plain text lyric formatter.

WHY: Editors and lyric sites need the cleaned lyric text alone: no
timestamps, no section labels, one line per sung line, a blank line
between verses. It is also the quickest way to eyeball whether the
segmenter recovered the layout correctly.

HOW: Delegates to Lyric.text(), which joins words (respecting their
whitespace flags) into lines and lines into paragraphs.

RULES:
- One text line per non-empty lyric line
- Double newline between paragraphs
- Trailing newline only when there is content
- Output suffix: "-lyrics.txt"; media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from suno_timeline.core.lyric import Lyric
from suno_timeline.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, lyric: Lyric) -> List[FormatterOutput]:
        content = lyric.text()
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-lyrics.txt",
                content=content,
                media_type="text/plain",
            )
        ]
