"""Core segmentation, assembly and intermediate representation modules.

WHY: The core package is the stable heart of the converter: the IR
dataclasses, the segmenter that recovers lyric layout from boundary
markers, the timeline builder and the lyric initialiser. Formatters, the
CLI and the HTTP API all sit on top of it.

HOW: ir.py defines the data structures, segmenter.py builds the
accumulator tree, cleanup.py holds the display-text rules, builder.py
turns the tree into word timelines, lyric.py wraps them for players,
parser.py chains it all, loader.py validates incoming payloads.

RULES:
- IR dataclasses are the contract — change with care
- Segmentation and assembly are synchronous and pure
- No formatter-specific logic here
"""

from suno_timeline.core.builder import TimelineBuilder, build, counter_id_factory
from suno_timeline.core.ir import AnnotatedChar, CharRecord, WordTimeline
from suno_timeline.core.lyric import Lyric, LyricLine, LyricParagraph
from suno_timeline.core.parser import SunoParser
from suno_timeline.core.segmenter import segment

__all__ = [
    "AnnotatedChar",
    "CharRecord",
    "Lyric",
    "LyricLine",
    "LyricParagraph",
    "SunoParser",
    "TimelineBuilder",
    "WordTimeline",
    "build",
    "counter_id_factory",
    "segment",
]
