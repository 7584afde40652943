"""Suno Timeline — aligned lyrics to karaoke timelines.

WHY: Suno's aligned-lyrics output is a flat array of timed text fragments
that no karaoke player can use directly. This package rebuilds the
lyric's paragraph/line/word layout from the boundary markers inside the
fragments, strips section labels, and exports the result to several
formats (timeline JSON, enhanced LRC, SRT, plain text).

HOW: Three-stage pipeline — load (validated aligned words), convert
(segment + build + Lyric init), format (pluggable formatters). Each
stage is independently testable.

RULES:
- All formatters consume the same initialised Lyric
- Adding a new output format = one new formatter module, no core changes
- The core conversion is pure and synchronous; only tokenizers may await
"""

__version__ = "0.1.0"
