"""
Change summaries, impact rating and review recommendations.

This module condenses a DiffResult into what a reviewer needs first:
a one-line summary, a coarse impact rating and a short list of review
recommendations triggered by simple heuristics.

Impact Rating:
The change ratio is (added + removed + modified) / entries, taken as 0
for an empty diff.
- LOW: ratio < 0.1
- MEDIUM: 0.1 <= ratio < 0.3
- HIGH: ratio >= 0.3

Recommendation Rules (each fires at most once, in this order):
- CONTENT_EXPANSION: added > 2 x removed
- CONTENT_REDUCTION: removed > 2 x added
- EXTENSIVE_REWORDING: modified > added + removed
- MAJOR_CHANGES: change ratio > 0.5

This module does NOT:
- Inspect the text of individual changes
- Decide whether a change is correct
"""

from dataclasses import dataclass
from typing import Dict, List
from enum import Enum

from textdiff.core.models import DiffResult, DiffStats


class ImpactLevel(Enum):
    """Coarse rating of how disruptive a set of changes is."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationType(Enum):
    """Heuristic review flags raised by summarize_changes()."""
    CONTENT_EXPANSION = "content_expansion"      # Far more added than removed
    CONTENT_REDUCTION = "content_reduction"      # Far more removed than added
    EXTENSIVE_REWORDING = "extensive_rewording"  # Modifications dominate
    MAJOR_CHANGES = "major_changes"              # Over half the entries changed


@dataclass(frozen=True)
class Recommendation:
    """
    A single review recommendation.

    Attributes:
        rec_type: Which rule produced it
        message: Fixed human-readable guidance for that rule
    """
    rec_type: RecommendationType
    message: str


@dataclass(frozen=True)
class ChangeSummary:
    """
    Reviewer-facing summary of a diff.

    Attributes:
        summary: Sentence listing counts per change type
        change_types: Count per change type
        impact: Impact rating from the change ratio
        change_ratio: (added + removed + modified) / entries
        recommendations: Triggered review recommendations, in rule order
    """
    summary: str
    change_types: Dict[str, int]
    impact: ImpactLevel
    change_ratio: float
    recommendations: List[Recommendation]

    @property
    def recommendation_messages(self) -> List[str]:
        """Plain messages of all recommendations."""
        return [r.message for r in self.recommendations]

    def has_recommendations(self) -> bool:
        """Check if any rule fired."""
        return len(self.recommendations) > 0


# =============================================================================
# Thresholds and Messages
# =============================================================================

# Upper bounds (exclusive) of the change ratio for each impact level.
IMPACT_THRESHOLDS = {
    "low": 0.1,
    "medium": 0.3,
}

# Change ratio above which a full review is recommended.
MAJOR_CHANGE_RATIO = 0.5

# One side must outnumber the other by this factor to flag expansion/reduction.
IMBALANCE_FACTOR = 2

RECOMMENDATION_MESSAGES = {
    RecommendationType.CONTENT_EXPANSION:
        "Content expansion detected - verify new information is accurate",
    RecommendationType.CONTENT_REDUCTION:
        "Content reduction detected - verify important information was not lost",
    RecommendationType.EXTENSIVE_REWORDING:
        "Extensive rewording detected - review for meaning preservation",
    RecommendationType.MAJOR_CHANGES:
        "Major changes detected - comprehensive review recommended",
}


# =============================================================================
# Analysis Functions
# =============================================================================

def compute_change_ratio(result: DiffResult) -> float:
    """Fraction of entries that are not unchanged (0 for an empty diff)."""
    total_items = len(result.changes)
    if total_items == 0:
        return 0.0
    return result.stats.total_changes / total_items


def rate_impact(change_ratio: float) -> ImpactLevel:
    """
    Convert a change ratio to an impact level.

    Args:
        change_ratio: Fraction of changed entries (0-1)

    Returns:
        ImpactLevel
    """
    if change_ratio < IMPACT_THRESHOLDS["low"]:
        return ImpactLevel.LOW
    elif change_ratio < IMPACT_THRESHOLDS["medium"]:
        return ImpactLevel.MEDIUM
    else:
        return ImpactLevel.HIGH


def _plural(count: int, noun: str = "item") -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def _describe_counts(stats: DiffStats) -> str:
    """Build the summary sentence, or 'No changes detected'."""
    parts = []
    if stats.added > 0:
        parts.append(f"Added {_plural(stats.added)}.")
    if stats.removed > 0:
        parts.append(f"Removed {_plural(stats.removed)}.")
    if stats.modified > 0:
        parts.append(f"Modified {_plural(stats.modified)}.")
    if stats.unchanged > 0:
        parts.append(f"{_plural(stats.unchanged)} unchanged.")

    return " ".join(parts) or "No changes detected"


def _build_recommendations(stats: DiffStats, change_ratio: float) -> List[Recommendation]:
    """Apply each recommendation rule once, in rule order."""
    triggered: List[RecommendationType] = []

    if stats.added > stats.removed * IMBALANCE_FACTOR:
        triggered.append(RecommendationType.CONTENT_EXPANSION)
    if stats.removed > stats.added * IMBALANCE_FACTOR:
        triggered.append(RecommendationType.CONTENT_REDUCTION)
    if stats.modified > stats.added + stats.removed:
        triggered.append(RecommendationType.EXTENSIVE_REWORDING)
    if change_ratio > MAJOR_CHANGE_RATIO:
        triggered.append(RecommendationType.MAJOR_CHANGES)

    return [
        Recommendation(rec_type=rec_type, message=RECOMMENDATION_MESSAGES[rec_type])
        for rec_type in triggered
    ]


# =============================================================================
# Main Entry Point
# =============================================================================

def summarize_changes(result: DiffResult) -> ChangeSummary:
    """
    Summarize a diff for review.

    Args:
        result: DiffResult from diff() or stream_diff()

    Returns:
        ChangeSummary with summary text, impact and recommendations

    Example:
        >>> summary = summarize_changes(diff(old, new))
        >>> print(summary.impact.value, summary.summary)
        >>> for message in summary.recommendation_messages:
        ...     print(f"- {message}")
    """
    stats = result.stats
    change_ratio = compute_change_ratio(result)

    return ChangeSummary(
        summary=_describe_counts(stats),
        change_types=stats.as_dict(),
        impact=rate_impact(change_ratio),
        change_ratio=change_ratio,
        recommendations=_build_recommendations(stats, change_ratio),
    )
