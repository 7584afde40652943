"""Abstract base formatter and output container.

WHY: Every output format consumes the same initialised Lyric but produces
different file content. This base class enforces a consistent interface
so the CLI and the HTTP API can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements — a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list so a formatter may emit several files
- ``suffix`` starts with a hyphen, e.g. ``"-lyrics.lrc"``
- The caller is responsible for prepending the source filename stem
- Formatters never mutate the Lyric
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from suno_timeline.core.lyric import Lyric


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-lyrics.lrc"`` → ``"song-lyrics.lrc"``.
        content: The file content as a string or bytes.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Enhanced LRC'."""

    @abstractmethod
    def format(self, lyric: Lyric) -> list[FormatterOutput]:
        """Convert an initialised Lyric into one or more output files."""
