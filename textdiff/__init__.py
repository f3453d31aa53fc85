"""
textdiff - Granular Text Comparison Engine

Compares two texts at character, word, line, sentence or paragraph
granularity and explains what changed, with lexical similarity scoring,
review summaries and chunked streaming for large inputs.
"""

from textdiff.core.engine import diff
from textdiff.core.streaming import stream_diff, collect_stream, DiffProgress
from textdiff.core.models import (
    ChangeRecord,
    ChangeType,
    DiffOptions,
    DiffResult,
    DiffStats,
    Granularity,
    KeyWords,
    OptionsError,
)
from textdiff.core.insights import compute_diff_insights, DiffInsights
from textdiff.core.summary import (
    summarize_changes,
    ChangeSummary,
    ImpactLevel,
    Recommendation,
    RecommendationType,
)
from textdiff.core.highlight import compute_character_diff, CharacterDiff, CharTag
from textdiff.core.merge import generate_merged_text, merge_separator, MergeDecision
from textdiff.core.navigation import (
    find_next_change,
    find_previous_change,
    get_all_change_indices,
)
from textdiff.core.formatting import format_diff, format_diff_json
from textdiff.core.text_analysis import analyze_text, TextAnalysis

__version__ = "1.0.0"
__all__ = [
    # Core diff
    "diff",
    "DiffOptions",
    "DiffResult",
    "DiffStats",
    "ChangeRecord",
    "ChangeType",
    "Granularity",
    "KeyWords",
    "OptionsError",
    # Streaming
    "stream_diff",
    "collect_stream",
    "DiffProgress",
    # Insights and summaries
    "compute_diff_insights",
    "DiffInsights",
    "summarize_changes",
    "ChangeSummary",
    "ImpactLevel",
    "Recommendation",
    "RecommendationType",
    # Utilities
    "compute_character_diff",
    "CharacterDiff",
    "CharTag",
    "generate_merged_text",
    "merge_separator",
    "MergeDecision",
    "find_next_change",
    "find_previous_change",
    "get_all_change_indices",
    "format_diff",
    "format_diff_json",
    "analyze_text",
    "TextAnalysis",
]
