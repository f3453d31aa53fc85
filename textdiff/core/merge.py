"""
Reconstruct a merged text from a change list and per-entry decisions.

Decision rules per change type:
- ADDED: kept on ACCEPT or KEEP, dropped on REJECT
- REMOVED: kept on REJECT or KEEP, dropped on ACCEPT
- MODIFIED: modified side on ACCEPT, original side on REJECT,
  modified side on KEEP
- UNCHANGED: always the original side

Entries without a decision default to KEEP. Kept pieces are joined with
a separator that should match the granularity the changes came from;
merge_separator() picks it. With that separator a self-diff merges back
to its input exactly for:
- CHARACTER and SENTENCE (tokens already carry every character)
- LINE, when all line breaks in the text use the same terminator
WORD and PARAGRAPH tokens drop the whitespace between them, so those
round-trip only when it was a single space or a single blank line.
"""

from typing import List, Mapping, Optional, Sequence
from enum import Enum

from textdiff.core.models import ChangeRecord, ChangeType, Granularity


class MergeDecision(Enum):
    """Reviewer decision for one change entry."""
    ACCEPT = "accept"  # Take the modified side
    REJECT = "reject"  # Keep the original side
    KEEP = "keep"      # Default rules: keep both for add/remove, modified for pairs


# Joiners for granularities whose separator does not depend on the text.
_SEPARATORS = {
    Granularity.CHARACTER: "",
    Granularity.WORD: " ",
    Granularity.SENTENCE: "",
    Granularity.PARAGRAPH: "\n\n",
}


def merge_separator(granularity: Granularity, text: str = "") -> str:
    """
    Joiner that turns tokens of the given granularity back into text.

    For LINE granularity the terminator is taken from text: "\\r\\n" if
    the text contains one, otherwise "\\n".
    """
    if granularity == Granularity.LINE:
        return "\r\n" if "\r\n" in text else "\n"
    return _SEPARATORS[granularity]


def _resolve(change: ChangeRecord, decision: MergeDecision) -> Optional[str]:
    """Return the text to emit for one entry, or None to drop it."""
    if change.change_type == ChangeType.UNCHANGED:
        return change.original or ""

    if change.change_type == ChangeType.ADDED:
        if decision in (MergeDecision.ACCEPT, MergeDecision.KEEP):
            return change.modified or ""
        return None

    if change.change_type == ChangeType.REMOVED:
        if decision in (MergeDecision.REJECT, MergeDecision.KEEP):
            return change.original or ""
        return None

    if decision == MergeDecision.REJECT:
        return change.original or ""
    return change.modified or ""


def generate_merged_text(
    changes: Sequence[ChangeRecord],
    decisions: Optional[Mapping[int, MergeDecision]] = None,
    separator: str = "\n",
) -> str:
    """
    Replay a change list applying per-entry decisions.

    Args:
        changes: Change records, typically DiffResult.changes
        decisions: Map from change index to decision (missing means KEEP)
        separator: Joiner between kept pieces, see merge_separator()

    Returns:
        Merged text

    Example:
        >>> result = diff("a\\nb", "a\\nc")
        >>> generate_merged_text(result.changes, {1: MergeDecision.REJECT})
        'a\\nb'
    """
    decisions = decisions or {}
    pieces: List[str] = []

    for index, change in enumerate(changes):
        piece = _resolve(change, decisions.get(index, MergeDecision.KEEP))
        if piece is not None:
            pieces.append(piece)

    return separator.join(pieces)
