"""Shared test fixtures for the suno_timeline test suite.

WHY: Most test modules need the same small Suno aligned-lyrics payload:
two paragraphs, a section label on its own line, a label glued to the
first word, word and line breaks. Centralizing it keeps the expected
values in one place.

HOW: Pytest fixtures provide the raw aligned-word dicts, the parsed
CharRecords, and an initialised Lyric built with deterministic word ids.

RULES:
- Word ids are deterministic ("word-1", "word-2", ...) for reproducibility
- The sample segments (split_words=True) into:
    paragraph 1: "Hello world" / "sing along"
    paragraph 2: <empty line from "[Chorus]"> / "La la"
"""

import asyncio
from typing import Any, Dict, List

import pytest

from suno_timeline.core.builder import counter_id_factory
from suno_timeline.core.ir import CharRecord
from suno_timeline.core.parser import SunoParser


SAMPLE_ALIGNED_WORDS: List[Dict[str, Any]] = [
    {"word": "[Verse]\nHel",  "start_s": 0.5, "end_s": 0.8, "success": True, "p_align": 0.91},
    {"word": "lo ",           "start_s": 0.8, "end_s": 1.0, "success": True, "p_align": 0.88},
    {"word": "world\n",       "start_s": 1.0, "end_s": 1.5, "success": True, "p_align": 0.95},
    {"word": "sing ",         "start_s": 1.6, "end_s": 1.9, "success": True, "p_align": 0.90},
    {"word": "along\n\n",     "start_s": 1.9, "end_s": 2.4, "success": True, "p_align": 0.87},
    {"word": "[Chorus]\n",    "start_s": 2.5, "end_s": 2.6, "success": False, "p_align": 0.10},
    {"word": "La ",           "start_s": 2.7, "end_s": 3.0, "success": True, "p_align": 0.93},
    {"word": "la\n",          "start_s": 3.0, "end_s": 3.3, "success": True, "p_align": 0.92},
]

SAMPLE_RESOURCE_ID = "7fcebd38-00b7-4c9a-9eba-1df4af210e48"


@pytest.fixture
def sample_aligned_words():
    return [dict(item) for item in SAMPLE_ALIGNED_WORDS]


@pytest.fixture
def sample_records():
    return [CharRecord.from_dict(item) for item in SAMPLE_ALIGNED_WORDS]


@pytest.fixture
def sample_lyric(sample_records):
    """Initialised Lyric for the sample payload with deterministic ids."""
    parser = SunoParser(id_factory=counter_id_factory())
    return asyncio.run(parser.parse(sample_records, SAMPLE_RESOURCE_ID))
