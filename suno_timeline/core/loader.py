"""Loading and validating Suno aligned-word payloads.

WHY: Aligned words arrive either as a bare JSON array or wrapped in the
Suno aligned-lyrics response object (``{"aligned_words": [...], ...}``).
A malformed item deep in a long array should fail loudly at the edge,
with its position, rather than as a KeyError inside the segmenter.

HOW: unwrap_aligned_words() accepts both shapes. The array is validated
against the bundled JSON Schema with jsonschema, then converted item by
item with CharRecord.from_dict().

RULES:
- Required per item: word (string), start_s and end_s (numbers)
- Optional per item: success (bool, default True), p_align (number, default 0.0)
- Unknown extra keys are ignored
- Any validation failure raises ValueError naming the offending path
- Files are read as UTF-8
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import jsonschema

from suno_timeline.core.ir import CharRecord

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "aligned_words.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the aligned-words JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def unwrap_aligned_words(data: Any) -> Any:
    """Return the aligned-word array from either accepted payload shape."""
    if isinstance(data, dict):
        if "aligned_words" not in data:
            raise ValueError("Payload object has no 'aligned_words' field.")
        return data["aligned_words"]
    return data


def load_aligned_words(data: Any) -> List[CharRecord]:
    """Validate a decoded JSON payload and convert it to CharRecords.

    Args:
        data: A list of aligned-word dicts, or a dict holding one under
              ``aligned_words``.

    Returns:
        CharRecords in input order.

    Raises:
        ValueError: If the payload does not match the schema.
    """
    items = unwrap_aligned_words(data)
    try:
        jsonschema.validate(instance=items, schema=_get_schema())
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ValueError(
            "Invalid aligned words at {}: {}".format(location, e.message)
        ) from e
    return [CharRecord.from_dict(item) for item in items]


def load_aligned_words_file(path: str | Path) -> List[CharRecord]:
    """Read a JSON file of aligned words.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not valid JSON or fails validation.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError("{} is not valid JSON: {}".format(path, e)) from e
    return load_aligned_words(data)
