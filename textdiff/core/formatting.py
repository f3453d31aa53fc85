"""
Plain-text, ANSI-colored and JSON renderings of a diff result.

Line markers:
    "+ text"         added
    "- text"         removed
    "~ old -> new"   modified
    "  text"         unchanged

The colored form prefixes each line with 4-wide original/modified line
numbers when the entry has them, and colors markers with ANSI escapes.
Both forms end with a statistics block.
"""

import json
from typing import List

from textdiff.core.models import ChangeRecord, ChangeType, DiffResult


# ANSI SGR sequences for the colored renderer.
ANSI_COLORS = {
    "green": "\x1b[32m",
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
    "gray": "\x1b[90m",
}
ANSI_RESET = "\x1b[0m"


def _paint(text: str, color: str) -> str:
    return f"{ANSI_COLORS[color]}{text}{ANSI_RESET}"


def _plain_line(change: ChangeRecord) -> str:
    if change.change_type == ChangeType.ADDED:
        return f"+ {change.modified}"
    elif change.change_type == ChangeType.REMOVED:
        return f"- {change.original}"
    elif change.change_type == ChangeType.MODIFIED:
        return f"~ {change.original} -> {change.modified}"
    else:
        return f"  {change.original}"


def _line_prefix(change: ChangeRecord) -> str:
    if change.original_line is None and change.modified_line is None:
        return ""
    original = "" if change.original_line is None else str(change.original_line)
    modified = "" if change.modified_line is None else str(change.modified_line)
    return f"{original:>4} {modified:>4} "


def _colored_line(change: ChangeRecord) -> str:
    prefix = _line_prefix(change)
    original = change.original or ""
    modified = change.modified or ""

    if change.change_type == ChangeType.ADDED:
        return f"{prefix}{_paint('+', 'green')} {_paint(modified, 'green')}"
    elif change.change_type == ChangeType.REMOVED:
        return f"{prefix}{_paint('-', 'red')} {_paint(original, 'red')}"
    elif change.change_type == ChangeType.MODIFIED:
        return (f"{prefix}{_paint('~', 'yellow')} {_paint(original, 'red')} "
                f"{_paint('->', 'gray')} {_paint(modified, 'green')}")
    else:
        return f"{prefix}{_paint(' ', 'gray')} {original}"


def format_stats(result: DiffResult) -> List[str]:
    """Statistics block lines."""
    stats = result.stats
    return [
        "Statistics:",
        f"  Added:    {stats.added}",
        f"  Removed:  {stats.removed}",
        f"  Modified: {stats.modified}",
        f"  Unchanged: {stats.unchanged}",
    ]


def format_diff(result: DiffResult, color: bool = True) -> str:
    """
    Render a diff result for the console.

    Args:
        result: DiffResult to render
        color: Use ANSI colors and line-number gutters

    Returns:
        Multi-line string ending with the statistics block
    """
    render = _colored_line if color else _plain_line
    output = [render(change) for change in result.changes]
    output.append("")
    output.extend(format_stats(result))
    return "\n".join(output)


def format_diff_json(result: DiffResult) -> str:
    """Render a diff result as indented JSON."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
