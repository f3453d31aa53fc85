"""
Main diff engine orchestrating the comparison pipeline.

This module provides the high-level API for comparing two texts. It
coordinates:
1. Tokenization of both texts
2. Normalization of tokens for comparison
3. LCS alignment of the normalized sequences
4. Classification into unchanged / added / removed / modified records
5. Semantic scoring of modified pairs (optional)

The primary entry point is diff(), which takes raw text inputs and
returns a structured DiffResult.

Design Principles:
- Single responsibility: orchestration only, delegates to specialized modules
- Trust the boundary: options are validated by DiffOptions.from_mapping()
- Deterministic: same inputs produce same outputs
- No side effects: pure computation, no shared state between calls
"""

import logging
from typing import List, Optional, Sequence

from textdiff.core.models import (
    ChangeRecord,
    ChangeType,
    DiffOptions,
    DiffResult,
    Granularity,
    DEFAULT_DIFF_OPTIONS,
)
from textdiff.core.tokenizer import normalize_tokens, tokenize
from textdiff.core.alignment import longest_common_subsequence
from textdiff.core.similarity import score_modification

logger = logging.getLogger(__name__)


class _LineCounter:
    """Running 1-indexed line positions for both sides."""

    def __init__(self, enabled: bool):
        self.enabled = enabled
        self.original = 1
        self.modified = 1

    def take_original(self) -> Optional[int]:
        if not self.enabled:
            return None
        line = self.original
        self.original += 1
        return line

    def take_modified(self) -> Optional[int]:
        if not self.enabled:
            return None
        line = self.modified
        self.modified += 1
        return line


def _modified_record(
    original: str,
    modified: str,
    original_line: Optional[int],
    modified_line: Optional[int],
    options: DiffOptions,
) -> ChangeRecord:
    """Build a MODIFIED record, scoring it when semantic analysis is on."""
    if not options.semantic_analysis:
        return ChangeRecord(
            change_type=ChangeType.MODIFIED,
            original=original,
            modified=modified,
            original_line=original_line,
            modified_line=modified_line,
        )

    similarity, key_words, explanation = score_modification(
        original, modified, options.similarity_threshold
    )
    return ChangeRecord(
        change_type=ChangeType.MODIFIED,
        original=original,
        modified=modified,
        original_line=original_line,
        modified_line=modified_line,
        similarity=similarity,
        explanation=explanation,
        key_words=key_words,
    )


def _classify(
    original_tokens: Sequence[str],
    modified_tokens: Sequence[str],
    original_normalized: Sequence[str],
    modified_normalized: Sequence[str],
    common: Sequence[str],
    options: DiffOptions,
) -> List[ChangeRecord]:
    """
    Reconcile both token sequences against their LCS.

    Walks the original (i), modified (j) and LCS (k) positions left to
    right. While both sides remain:
    1. Both tokens equal the next LCS element: UNCHANGED, advance i, j, k
    2. Only the original token equals it: ADDED (the modified side is
       ahead of the anchor), advance j
    3. Only the modified token equals it: REMOVED, advance i
    4. Neither does: MODIFIED pair, advance i and j
    Leftover tokens on either side drain as REMOVED or ADDED.
    """
    changes: List[ChangeRecord] = []
    lines = _LineCounter(options.granularity == Granularity.LINE)
    m, n, lcs_len = len(original_tokens), len(modified_tokens), len(common)
    i = j = k = 0

    while i < m and j < n:
        norm_a = original_normalized[i]
        norm_b = modified_normalized[j]
        anchor = common[k] if k < lcs_len else None

        if anchor is not None and norm_a == norm_b and norm_a == anchor:
            changes.append(ChangeRecord(
                change_type=ChangeType.UNCHANGED,
                original=original_tokens[i],
                modified=modified_tokens[j],
                original_line=lines.take_original(),
                modified_line=lines.take_modified(),
            ))
            i += 1
            j += 1
            k += 1
        elif anchor is not None and norm_a == anchor:
            changes.append(ChangeRecord(
                change_type=ChangeType.ADDED,
                modified=modified_tokens[j],
                modified_line=lines.take_modified(),
            ))
            j += 1
        elif anchor is not None and norm_b == anchor:
            changes.append(ChangeRecord(
                change_type=ChangeType.REMOVED,
                original=original_tokens[i],
                original_line=lines.take_original(),
            ))
            i += 1
        else:
            changes.append(_modified_record(
                original_tokens[i],
                modified_tokens[j],
                lines.take_original(),
                lines.take_modified(),
                options,
            ))
            i += 1
            j += 1

    while i < m:
        changes.append(ChangeRecord(
            change_type=ChangeType.REMOVED,
            original=original_tokens[i],
            original_line=lines.take_original(),
        ))
        i += 1

    while j < n:
        changes.append(ChangeRecord(
            change_type=ChangeType.ADDED,
            modified=modified_tokens[j],
            modified_line=lines.take_modified(),
        ))
        j += 1

    return changes


def diff(
    original: str,
    modified: str,
    options: Optional[DiffOptions] = None,
) -> DiffResult:
    """
    Compare two texts and return an ordered list of classified changes.

    This is the main entry point for the diff engine. It:
    1. Splits both texts into tokens at the configured granularity
    2. Normalizes tokens (whitespace/case) for comparison only
    3. Aligns the normalized sequences with an LCS
    4. Classifies each position as unchanged, added, removed or modified
    5. Scores modified pairs when semantic analysis is enabled

    Never raises for any text content. Two empty texts produce an empty
    result with all-zero stats.

    Args:
        original: The original text
        modified: The modified text
        options: Diff configuration (defaults to DEFAULT_DIFF_OPTIONS)

    Returns:
        DiffResult with ordered changes and per-type stats

    Example:
        >>> result = diff("Hello world", "Hello there",
        ...               DiffOptions(granularity=Granularity.WORD))
        >>> [c.change_type.value for c in result.changes]
        ['unchanged', 'modified']
    """
    if options is None:
        options = DEFAULT_DIFF_OPTIONS

    if not original and not modified:
        return DiffResult()

    # Step 1: Tokenize both texts
    original_tokens = tokenize(original, options.granularity)
    modified_tokens = tokenize(modified, options.granularity)

    # Step 2: Normalize for comparison
    original_normalized = normalize_tokens(original_tokens, options)
    modified_normalized = normalize_tokens(modified_tokens, options)

    # Step 3: Align
    common = longest_common_subsequence(original_normalized, modified_normalized)
    logger.debug(
        "Aligned %d x %d %s tokens, LCS length %d",
        len(original_tokens), len(modified_tokens),
        options.granularity.value, len(common),
    )

    # Step 4: Classify
    changes = _classify(
        original_tokens,
        modified_tokens,
        original_normalized,
        modified_normalized,
        common,
        options,
    )

    return DiffResult.from_changes(changes)
