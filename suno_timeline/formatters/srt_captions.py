"""SRT caption formatter — one cue per lyric line.

WHY: Video editors overlay lyrics as subtitles. SRT is the lowest common
denominator every editor and player imports.

HOW: Every non-empty lyric line becomes one cue that starts at its first
word's begin and ends at its last word's end. Cues are numbered from 1.

RULES:
- Timestamp format: HH:MM:SS,mmm; negative times clamp to zero
- A cue whose end precedes its start is emitted with end = start
- Empty lines produce no cue
- Output suffix: "-lyrics.srt"; media type: "application/x-subrip"
- Never modifies the Lyric
"""

from typing import List

from suno_timeline.core.lyric import Lyric
from suno_timeline.formatters.base import BaseFormatter, FormatterOutput


def format_srt_time(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS,mmm``."""
    millis = max(0, int(round(seconds * 1000)))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    secs, millis = divmod(millis, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


class SRTCaptionFormatter(BaseFormatter):
    """Formatter that produces one SRT cue per lyric line."""

    @property
    def name(self) -> str:
        return "SRT Captions"

    def format(self, lyric: Lyric) -> List[FormatterOutput]:
        cues: List[str] = []
        for line in lyric.lines():
            if not line.words:
                continue
            start = line.begin
            end = max(line.end, start)
            cues.append("{}\n{} --> {}\n{}\n".format(
                len(cues) + 1,
                format_srt_time(start),
                format_srt_time(end),
                line.text(),
            ))

        return [
            FormatterOutput(
                suffix="-lyrics.srt",
                content="\n".join(cues),
                media_type="application/x-subrip",
            )
        ]
