"""Nested timeline JSON formatter.

WHY: Web karaoke players load the lyric as JSON: paragraphs of lines of
words, each word with its id, timing, display text and boundary flags.
This is the lossless export of the Lyric and the shape the HTTP API
returns.

HOW: lyric_to_dict() walks the Lyric's paragraphs and lines and emits
camelCase keys. The formatter serialises that dict and validates it with
jsonschema against schemas/timeline.schema.json before returning.

RULES:
- Top-level keys: resourceID, duration, offsetSec, paragraphs
- Word keys: wordID, begin, end, text, hasNewLine, hasWhitespace
- Empty lines are kept as ``{"words": []}``
- Times are emitted with the offset already applied
- Output suffix: "-timeline.json"; media type: "application/json"
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from suno_timeline.core.lyric import Lyric
from suno_timeline.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "timeline.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the timeline JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def lyric_to_dict(lyric: Lyric) -> Dict[str, Any]:
    """Convert an initialised Lyric into a JSON-ready dict."""
    paragraphs: List[Dict[str, Any]] = []
    for paragraph in lyric.paragraphs:
        lines = [
            {
                "words": [word.to_dict() for word in line.words],
                "tokens": line.tokens,
            }
            for line in paragraph.lines
        ]
        paragraphs.append({"lines": lines, "tokens": paragraph.tokens})

    return {
        "resourceID": lyric.resource_id,
        "duration": lyric.duration_s,
        "offsetSec": lyric.offset_s,
        "paragraphs": paragraphs,
    }


def validate_timeline_dict(data: Dict[str, Any]) -> None:
    """Raise jsonschema.ValidationError if ``data`` breaks the timeline schema."""
    jsonschema.validate(instance=data, schema=_get_schema())


class TimelineJSONFormatter(BaseFormatter):
    """Formatter that produces the nested timeline JSON file."""

    @property
    def name(self) -> str:
        return "Timeline JSON"

    def format(self, lyric: Lyric) -> List[FormatterOutput]:
        data = lyric_to_dict(lyric)
        validate_timeline_dict(data)
        return [
            FormatterOutput(
                suffix="-timeline.json",
                content=json.dumps(data, ensure_ascii=False, indent=2),
                media_type="application/json",
            )
        ]
