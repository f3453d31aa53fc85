"""
Command line interface for textdiff.

Usage:
    textdiff [options] ORIGINAL MODIFIED

Each argument is a file path, "-" for stdin, or literal text when no
such file exists.

Examples:
    textdiff old.txt new.txt
    textdiff -g word "old text" "new text"
    textdiff -w -i --summary old.txt new.txt
    textdiff --stream --chunk-size 2000 big_old.txt big_new.txt
    echo "text1" | textdiff - "text2"
"""

import argparse
import logging
import pathlib
import sys
from typing import List, Optional

from tqdm import tqdm

from textdiff import __version__
from textdiff.core.engine import diff
from textdiff.core.formatting import format_diff, format_diff_json
from textdiff.core.insights import compute_diff_insights
from textdiff.core.models import DiffOptions, DiffResult, Granularity, OptionsError
from textdiff.core.streaming import DEFAULT_STREAM_CHUNK_SIZE, stream_diff
from textdiff.core.summary import summarize_changes

logger = logging.getLogger("textdiff")


def read_text(source: str) -> str:
    """
    Read a file, stdin ("-"), or fall back to the literal argument.

    Files are decoded as UTF-8; invalid bytes raise UnicodeDecodeError.
    """
    if source == "-":
        return sys.stdin.read()
    path = pathlib.Path(source)
    if path.is_file():
        return path.read_text(encoding="utf-8")
    return source


def run_stream(original: str, modified: str, options: DiffOptions, chunk_size: int) -> DiffResult:
    """Drive stream_diff() with a progress bar and return the final result."""
    result: Optional[DiffResult] = None
    with tqdm(total=100, desc="Diffing", unit="%", disable=logger.level > logging.INFO) as bar:
        for event in stream_diff(original, modified, options, chunk_size=chunk_size):
            bar.update(event.progress - bar.n)
            if event.complete:
                result = event.partial_result
    if result is None:
        raise RuntimeError("Stream ended without a complete result")
    return result


def render_summary(result: DiffResult) -> str:
    """Summary, impact, recommendations and insights as text lines."""
    summary = summarize_changes(result)
    insights = compute_diff_insights(result)

    lines = [
        "",
        f"Summary: {summary.summary}",
        f"Impact: {summary.impact.value}",
        f"Changed: {insights.change_percentage}%  Similarity: {insights.similarity}%",
    ]
    for message in summary.recommendation_messages:
        lines.append(f"  * {message}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="textdiff",
        description="Compare two texts at character, word, line, sentence or paragraph granularity",
    )
    p.add_argument("original", help="Original text, path to file, or - for stdin")
    p.add_argument("modified", help="Modified text, path to file, or - for stdin")
    p.add_argument(
        "-g", "--granularity",
        choices=[g.value for g in Granularity],
        default=Granularity.LINE.value,
        help="Diff granularity (default: line)",
    )
    p.add_argument("-w", "--ignore-whitespace", action="store_true",
                   help="Ignore whitespace differences")
    p.add_argument("-i", "--ignore-case", action="store_true",
                   help="Ignore case differences")
    p.add_argument("-s", "--semantic", action="store_true",
                   help="Score and explain modified entries")
    p.add_argument("--threshold", type=float, default=None,
                   help="Similarity threshold (0-1) for explanation wording")
    p.add_argument("-o", "--output", choices=["text", "json"], default="text",
                   help="Output format (default: text)")
    p.add_argument("--no-color", action="store_true", help="Plain text output")
    p.add_argument("--summary", action="store_true",
                   help="Append summary, impact and recommendations")
    p.add_argument("--stream", action="store_true",
                   help="Process large inputs in chunks with a progress bar")
    p.add_argument("--chunk-size", type=int, default=DEFAULT_STREAM_CHUNK_SIZE,
                   help="Characters per chunk when streaming")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    p.add_argument("-v", "--version", action="version", version=f"textdiff {__version__}")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(logging.DEBUG if args.debug else logging.INFO)

    raw_options = {
        "granularity": args.granularity,
        "ignoreWhitespace": args.ignore_whitespace,
        "ignoreCase": args.ignore_case,
        "semanticAnalysis": args.semantic,
    }
    if args.threshold is not None:
        raw_options["similarityThreshold"] = args.threshold

    try:
        options = DiffOptions.from_mapping(raw_options)
    except OptionsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.stream and args.chunk_size <= 0:
        print("Error: --chunk-size must be positive", file=sys.stderr)
        return 2

    try:
        original = read_text(args.original)
        modified = read_text(args.modified)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: failed to read input: {e}", file=sys.stderr)
        return 1

    if args.stream:
        result = run_stream(original, modified, options, args.chunk_size)
    else:
        result = diff(original, modified, options)

    if args.output == "json":
        print(format_diff_json(result))
    else:
        print(format_diff(result, color=not args.no_color))
        if args.summary:
            print(render_summary(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
