"""Output formatter registry — pluggable format hub.

WHY: The CLI and the HTTP API need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["lrc"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API paths)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from suno_timeline.formatters.lrc import LRCFormatter
from suno_timeline.formatters.plain_text import PlainTextFormatter
from suno_timeline.formatters.srt_captions import SRTCaptionFormatter
from suno_timeline.formatters.timeline_json import TimelineJSONFormatter

if TYPE_CHECKING:
    from suno_timeline.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "timeline_json": TimelineJSONFormatter,
    "lrc": LRCFormatter,
    "plain_text": PlainTextFormatter,
    "srt_captions": SRTCaptionFormatter,
}
