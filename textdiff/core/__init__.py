"""
Core text comparison engine.

This module provides the foundational logic for:
- Normalization and tokenization at five granularities
- LCS alignment
- Change classification
- Lexical similarity scoring of modified pairs
- Insights and review summaries
- Chunked streaming for large inputs
"""

from textdiff.core.tokenizer import normalize, tokenize
from textdiff.core.alignment import longest_common_subsequence
from textdiff.core.engine import diff
from textdiff.core.streaming import stream_diff, DiffProgress
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
from textdiff.core.summary import summarize_changes, ChangeSummary, ImpactLevel

__all__ = [
    # Pipeline
    "normalize",
    "tokenize",
    "longest_common_subsequence",
    "diff",
    "stream_diff",
    "DiffProgress",
    # Models
    "ChangeRecord",
    "ChangeType",
    "DiffOptions",
    "DiffResult",
    "DiffStats",
    "Granularity",
    "KeyWords",
    "OptionsError",
    # Analysis
    "compute_diff_insights",
    "DiffInsights",
    "summarize_changes",
    "ChangeSummary",
    "ImpactLevel",
]
