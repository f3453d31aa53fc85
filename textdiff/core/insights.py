"""
Change-level insights over a finished diff.

This module turns a DiffResult into quick-glance statistics: how much
changed, how similar the texts remain, and which single change is the
largest. It answers "how big is this diff?" while summary.py answers
"what should a reviewer do about it?".

Design Principles:
- Pure transformation: never re-runs the diff
- Compositional: builds on top of DiffResult
- Display-ready: percentages rounded to two decimals

This module does NOT:
- Render UI
- Recompute alignment or similarity scores
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from textdiff.core.models import ChangeRecord, DiffResult


@dataclass(frozen=True)
class DiffInsights:
    """
    Aggregate statistics for a diff result.

    Attributes:
        total_changes: added + removed + modified
        change_percentage: total_changes / entries * 100 (0 when empty)
        similarity: unchanged / entries * 100 (100 when empty)
        largest_change: Non-unchanged entry with the longest text, first on ties
        change_distribution: Count per change type
    """
    total_changes: int
    change_percentage: float
    similarity: float
    largest_change: Optional[ChangeRecord]
    change_distribution: Dict[str, int]


def _round2(value: float) -> float:
    """Round to two decimals for display, halves rounding up."""
    return math.floor(value * 100 + 0.5) / 100


def find_largest_change(result: DiffResult) -> Optional[ChangeRecord]:
    """
    Find the changed entry spanning the most characters.

    The span of an entry is the length of its longer side. The first
    entry wins ties.

    Returns:
        The largest ChangeRecord, or None if nothing changed
    """
    largest: Optional[ChangeRecord] = None
    max_length = -1
    for change in result.changes:
        if not change.is_change:
            continue
        length = change.span_length
        if length > max_length:
            max_length = length
            largest = change
    return largest


def compute_diff_insights(result: DiffResult) -> DiffInsights:
    """
    Compute insights for a diff result.

    Args:
        result: DiffResult from diff() or stream_diff()

    Returns:
        DiffInsights with percentages, largest change and distribution

    Example:
        >>> insights = compute_diff_insights(diff(old, new))
        >>> print(f"{insights.change_percentage}% changed")
    """
    stats = result.stats
    total_entries = len(result.changes)
    total_changes = stats.total_changes

    if total_entries > 0:
        change_percentage = total_changes / total_entries * 100
        similarity = stats.unchanged / total_entries * 100
    else:
        change_percentage = 0.0
        similarity = 100.0

    return DiffInsights(
        total_changes=total_changes,
        change_percentage=_round2(change_percentage),
        similarity=_round2(similarity),
        largest_change=find_largest_change(result),
        change_distribution=stats.as_dict(),
    )
