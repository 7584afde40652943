"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: One request model (TimelineRequest wrapping the aligned words and
conversion options) and a response tree mirroring the timeline JSON
export. Field names in the response tree are camelCase on purpose: they
match the timeline JSON file byte for byte.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Request defaults come from suno_timeline.config
- Response models never expose internal implementation details
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from suno_timeline.config import DEFAULT_DURATION_S, DEFAULT_OFFSET_S, DEFAULT_SPLIT_WORDS
from suno_timeline.core.ir import CharRecord


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class AlignedWordModel(BaseModel):
    """One Suno aligned fragment."""

    word: str = Field(description="Fragment text, boundary markers included.")
    start_s: float = Field(description="Fragment start in seconds.")
    end_s: float = Field(description="Fragment end in seconds.")
    success: bool = Field(default=True, description="Alignment success flag from Suno.")
    p_align: float = Field(default=0.0, description="Alignment probability from Suno.")

    def to_record(self) -> CharRecord:
        return CharRecord(
            text=self.word,
            start_s=self.start_s,
            end_s=self.end_s,
            success=self.success,
            align_prob=self.p_align,
        )


class TimelineRequest(BaseModel):
    """Aligned words plus conversion options.

    RULES:
    - aligned_words may be empty (yields one paragraph with one empty line)
    - offset_s shifts every word; duration_s is passed through untouched
    """

    resource_id: str = Field(description="Opaque track id copied into the result.")
    aligned_words: List[AlignedWordModel] = Field(description="Ordered aligned fragments.")
    offset_s: float = Field(default=DEFAULT_OFFSET_S, description="Seconds added to every word.")
    duration_s: float = Field(default=DEFAULT_DURATION_S, description="Track duration placeholder.")
    split_words: bool = Field(
        default=DEFAULT_SPLIT_WORDS,
        description="Start a new word at every space outside a bracket label.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "resource_id": "7fcebd38-00b7-4c9a-9eba-1df4af210e48",
                "aligned_words": [
                    {"word": "[Verse]\nHello ", "start_s": 1.2, "end_s": 1.6, "success": True, "p_align": 0.9},
                    {"word": "world\n\n", "start_s": 1.6, "end_s": 2.1, "success": True, "p_align": 0.8},
                ],
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class WordTimelineModel(BaseModel):
    wordID: str = Field(description="Unique word id.")
    begin: float = Field(description="Word start in seconds, offset applied.")
    end: float = Field(description="Word end in seconds, offset applied.")
    text: str = Field(description="Cleaned display text.")
    hasNewLine: bool = Field(description="The word ends a visual line.")
    hasWhitespace: bool = Field(description="The word is followed by a space.")


class LineModel(BaseModel):
    words: List[WordTimelineModel] = Field(description="Words in display order; may be empty.")
    tokens: Optional[List[str]] = Field(default=None, description="Line tokenizer output.")


class ParagraphModel(BaseModel):
    lines: List[LineModel] = Field(description="Lines in display order.")
    tokens: Optional[List[str]] = Field(default=None, description="Paragraph tokenizer output.")


class TimelineResponse(BaseModel):
    """The converted lyric timeline."""

    resourceID: str = Field(description="Resource id from the request.")
    duration: float = Field(description="Duration from the request.")
    offsetSec: float = Field(description="Offset applied to every word.")
    paragraphs: List[ParagraphModel] = Field(description="Paragraphs in display order.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API paths.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-lyrics.lrc').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
