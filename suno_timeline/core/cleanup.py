"""Display-text cleanup for assembled words.

WHY: Suno lyrics carry non-lyrical annotations such as section labels
("[Verse]", "【サビ】") and ad-lib cues ("(ooh)"). They are aligned like any
other text, but karaoke display must not show them. A label can be split
over several fragments, so stripping happens after the word's fragments
have been joined, never per fragment.

HOW: Four independent non-greedy regex passes, one per bracket style,
followed by whitespace collapsing and trimming.

RULES:
- Pass order: 【…】, […], (…), （…）
- Each pass is non-greedy: "[a] b [c]" loses both labels and keeps " b "
- An unmatched bracket never matches and stays in the text
- Runs of non-newline whitespace collapse to a single space
- Leading/trailing whitespace is trimmed last
- has_open_annotation lets the segmenter keep a label that spans a space
  inside one word bucket, so the label is stripped as a whole
"""

from __future__ import annotations

import re

ANNOTATION_PATTERNS = (
    re.compile(r"【.*?】", re.DOTALL),
    re.compile(r"\[.*?\]", re.DOTALL),
    re.compile(r"\(.*?\)", re.DOTALL),
    re.compile(r"（.*?）", re.DOTALL),
)

_INLINE_WHITESPACE_RUN_RE = re.compile(r"[^\S\n]+")

_ANNOTATION_BRACKETS = (("【", "】"), ("[", "]"), ("(", ")"), ("（", "）"))


def strip_annotations(text: str) -> str:
    """Remove every bracketed annotation span from ``text``."""
    for pattern in ANNOTATION_PATTERNS:
        text = pattern.sub("", text)
    return text


def collapse_whitespace(text: str) -> str:
    return _INLINE_WHITESPACE_RUN_RE.sub(" ", text)


def clean_word_text(text: str) -> str:
    """Apply the full cleanup pipeline to a joined word text.

    >>> clean_word_text("[Verse] Hello   there ")
    'Hello there'
    """
    return collapse_whitespace(strip_annotations(text)).strip()


def has_open_annotation(text: str) -> bool:
    """True when ``text`` ends inside an unclosed bracket span.

    >>> has_open_annotation("[Verse")
    True
    >>> has_open_annotation("[Verse 1] Hel")
    False
    """
    return any(text.rfind(opener) > text.rfind(closer) for opener, closer in _ANNOTATION_BRACKETS)
