"""Enhanced LRC formatter with word-level timestamps.

WHY: Most desktop and mobile karaoke players read LRC. The "enhanced"
variant adds an inline ``<mm:ss.xx>`` tag before each word, which is
exactly the per-word highlighting the timeline carries.

HOW: Each non-empty line becomes one LRC line: a ``[mm:ss.xx]`` tag at the
line's first word, then every word prefixed by its own ``<mm:ss.xx>`` tag.
Words are separated by a space when the preceding word had one. Each line
closes with a bare tag at its last word's end so players know when to
stop highlighting. Paragraphs are separated by a blank line.

RULES:
- Timestamp format: mm:ss.xx (centiseconds, rounded); minutes not capped at 59
- Negative times (possible with a negative offset) clamp to 00:00.00
- Empty lines are skipped
- Header tags: [re:suno_timeline] and, when known, [length:mm:ss.xx]
- Output suffix: "-lyrics.lrc"; media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from suno_timeline.core.lyric import Lyric, LyricLine
from suno_timeline.formatters.base import BaseFormatter, FormatterOutput


def format_lrc_time(seconds: float) -> str:
    """Format seconds as ``mm:ss.xx``.

    >>> format_lrc_time(65.432)
    '01:05.43'
    """
    centis = max(0, int(round(seconds * 100)))
    minutes, centis = divmod(centis, 6000)
    secs, centis = divmod(centis, 100)
    return "{:02d}:{:02d}.{:02d}".format(minutes, secs, centis)


def _format_line(line: LyricLine) -> str:
    parts: List[str] = ["[{}]".format(format_lrc_time(line.words[0].begin))]
    for i, word in enumerate(line.words):
        parts.append("<{}>{}".format(format_lrc_time(word.begin), word.text))
        if word.has_whitespace and i < len(line.words) - 1:
            parts.append(" ")
    parts.append("<{}>".format(format_lrc_time(line.words[-1].end)))
    return "".join(parts)


class LRCFormatter(BaseFormatter):
    """Formatter that produces an enhanced (word-timed) LRC file."""

    @property
    def name(self) -> str:
        return "Enhanced LRC"

    def format(self, lyric: Lyric) -> List[FormatterOutput]:
        header = ["[re:suno_timeline]"]
        if lyric.duration_s:
            header.append("[length:{}]".format(format_lrc_time(lyric.duration_s)))

        blocks: List[str] = []
        for paragraph in lyric.paragraphs:
            lines = [_format_line(line) for line in paragraph.lines if line.words]
            if lines:
                blocks.append("\n".join(lines))

        content = "\n".join(header) + "\n"
        if blocks:
            content += "\n" + "\n\n".join(blocks) + "\n"

        return [
            FormatterOutput(
                suffix="-lyrics.lrc",
                content=content,
                media_type="text/plain",
            )
        ]
