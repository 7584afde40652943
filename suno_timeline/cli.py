"""Command-line interface for the Suno timeline converter.

WHY: Users need a simple way to turn a saved Suno aligned-lyrics JSON
file into karaoke files from the terminal. The CLI wires together the
full pipeline — payload loading and validation, segmentation, timeline
assembly, Lyric initialisation, pluggable formatter output, and file
saving — behind a single command.

HOW: Uses argparse to accept an input JSON file, conversion options
(offset, duration, word splitting), output format selection, and output
directory. Runs the async parser via asyncio.run(). Status messages go
to stderr; output files are saved next to the source (or to
--output-dir).

RULES:
- Positional argument: input JSON file (bare array or {"aligned_words": [...]})
- --resource-id defaults to the input file's stem
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-lyrics-2.lrc)
- Status output goes to stderr (not stdout)
- Invalid input, unknown formats or missing directories exit with code 1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from suno_timeline.config import (
    DEFAULT_DURATION_S,
    DEFAULT_OFFSET_S,
    DEFAULT_SPLIT_WORDS,
    resolve_log_level,
)
from suno_timeline.core.loader import load_aligned_words_file
from suno_timeline.core.parser import SunoParser
from suno_timeline.formatters import FORMATTERS
from suno_timeline.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. song-lyrics.lrc)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. song-lyrics-2.lrc)
    - Counter starts at 2 and increments

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    # e.g. "-lyrics.lrc" → ("-lyrics", ".lrc")
    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)

    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")

    return path


def _select_formats(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    format_keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError("Unknown format '{}'. Available formats: {}".format(key, available))
    return format_keys


async def _run_pipeline(args: argparse.Namespace) -> List[Path]:
    """Execute the full conversion pipeline.

    RULES:
    - Validate input file, output directory and format keys before converting
    - Status messages to stderr at each step
    - Save each formatter's output files with conflict avoidance
    """
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        raise ValueError("File not found: {}".format(input_path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        raise ValueError("Output directory does not exist: {}".format(output_dir))

    format_keys = _select_formats(args.formats)
    stem = input_path.stem
    resource_id = args.resource_id or stem

    _status("Loading aligned words from {}...".format(input_path.name))
    records = load_aligned_words_file(input_path)
    _status("  {} aligned fragments".format(len(records)))

    _status("Building timeline...")
    parser = SunoParser(
        offset_s=args.offset,
        split_words=args.split_words,
        duration_s=args.duration,
    )
    lyric = await parser.parse(records, resource_id)
    _status("  {} paragraphs, {} lines, {} words".format(
        len(lyric.paragraphs),
        len([line for line in lyric.lines() if line.words]),
        len(lyric.words()),
    ))

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(lyric):
            saved_path = _save_output(output, stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="suno_timeline",
        description="Convert Suno aligned lyrics into karaoke timelines "
                    "(timeline JSON, enhanced LRC, SRT, plain text).",
    )

    parser.add_argument(
        "input_file",
        help="Path to a JSON file of Suno aligned words.",
    )

    parser.add_argument(
        "--resource-id",
        default=None,
        help="Resource id recorded in the timeline (default: input file stem).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--offset",
        type=float,
        default=DEFAULT_OFFSET_S,
        help="Seconds added to every word timestamp (default: %(default)s).",
    )

    parser.add_argument(
        "--duration",
        type=float,
        default=DEFAULT_DURATION_S,
        help="Track duration in seconds recorded in the output (default: %(default)s).",
    )

    parser.add_argument(
        "--split-words",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_SPLIT_WORDS,
        help="Start a new word at every space outside a bracket label (default: %(default)s).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=resolve_log_level(args.verbose),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run_pipeline(args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ValueError, FileNotFoundError) as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
