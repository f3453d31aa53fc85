"""
Lexical similarity scoring for modified text pairs.

This module scores how close the two sides of a "modified" change remain,
extracts the significant words that differ, and renders an explanation.
It is a lexical-overlap heuristic, not a language model: no embeddings,
no synonyms, no word order.

Scoring Formula:
    similarity = 0.7 * jaccard(words(original), words(modified))
               + 0.3 * min(len(original), len(modified))
                     / max(len(original), len(modified))

where words() is the set of lower-cased alphanumeric runs and
    jaccard(A, B) = |A & B| / |A | B|

The weighting only applies when both sides have words. If neither side
has any, the score is 1.0; if exactly one side has none, it is 0.0.

Interpretation:
- 1.0: Same vocabulary, same length
- ~0.3: No shared words but similar length
- 0.0: One side has no words at all

The similarity threshold only selects explanation wording. It never
hides or reclassifies a change.
"""

import math
import re
from typing import List, Optional, Set, Tuple

from textdiff.core.models import DEFAULT_SIMILARITY_THRESHOLD, KeyWords


# Weights for the two similarity components. They sum to 1.0.
JACCARD_WEIGHT = 0.7
LENGTH_WEIGHT = 0.3

# Words must be longer than this to count as key words.
MIN_KEY_WORD_LENGTH = 3

# Maximum key words reported per side.
MAX_KEY_WORDS = 5

_WORD = re.compile(r'\w+')


def extract_words(text: str) -> List[str]:
    """
    Extract unique lower-cased words in first-occurrence order.

    Args:
        text: Input text

    Returns:
        Ordered list of distinct words
    """
    return list(dict.fromkeys(_WORD.findall(text.lower())))


def jaccard_similarity(words_a: Set[str], words_b: Set[str]) -> float:
    """
    Jaccard index of two word sets.

    Returns:
        1.0 if both sets are empty, 0.0 if exactly one is empty,
        otherwise |intersection| / |union|
    """
    if not words_a and not words_b:
        return 1.0
    if not words_a or not words_b:
        return 0.0
    return len(words_a & words_b) / len(words_a | words_b)


def length_ratio(text_a: str, text_b: str) -> float:
    """Ratio of the shorter text length to the longer (1.0 for two empty strings)."""
    longest = max(len(text_a), len(text_b))
    if longest == 0:
        return 1.0
    return min(len(text_a), len(text_b)) / longest


def lexical_similarity(original: str, modified: str) -> float:
    """
    Compute the weighted lexical similarity of two texts.

    Args:
        original: Text from the original side
        modified: Text from the modified side

    Returns:
        Score in [0, 1]; exactly 1.0 when neither text has words and
        0.0 when only one of them does
    """
    original_words = set(extract_words(original))
    modified_words = set(extract_words(modified))
    if not original_words and not modified_words:
        return 1.0
    if not original_words or not modified_words:
        return 0.0

    jaccard = jaccard_similarity(original_words, modified_words)
    return jaccard * JACCARD_WEIGHT + length_ratio(original, modified) * LENGTH_WEIGHT


def extract_key_words(original: str, modified: str) -> KeyWords:
    """
    Find significant words present on only one side.

    Only words longer than MIN_KEY_WORD_LENGTH characters are considered.
    Each side keeps first-occurrence order and is capped at MAX_KEY_WORDS.
    """
    original_words = [w for w in extract_words(original) if len(w) > MIN_KEY_WORD_LENGTH]
    modified_words = [w for w in extract_words(modified) if len(w) > MIN_KEY_WORD_LENGTH]
    original_set = set(original_words)
    modified_set = set(modified_words)

    added = [w for w in modified_words if w not in original_set]
    removed = [w for w in original_words if w not in modified_set]

    return KeyWords(
        added=tuple(added[:MAX_KEY_WORDS]),
        removed=tuple(removed[:MAX_KEY_WORDS]),
    )


def _percent(score: float) -> int:
    """Round a 0-1 score to a whole percentage, halves rounding up."""
    return int(math.floor(score * 100 + 0.5))


def explain_change(
    similarity: float,
    key_words: KeyWords,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> str:
    """
    Render a human-readable explanation for a modified pair.

    Above the threshold the change reads as a rewording and names the
    first added and first removed key word. At or below it the change
    reads as a significant modification naming up to two added words.

    Args:
        similarity: Score from lexical_similarity()
        key_words: Key words from extract_key_words()
        threshold: Wording threshold (0-1)

    Returns:
        Explanation string
    """
    if similarity > threshold:
        parts = []
        if key_words.added:
            parts.append(f'added "{key_words.added[0]}"')
        if key_words.removed:
            parts.append(f'removed "{key_words.removed[0]}"')
        detail = " ".join(parts)
        return f"Reworded with {_percent(similarity)}% similarity. Key changes: {detail}".strip()

    return f"Significantly modified. New focus: {', '.join(key_words.added[:2])}".strip()


def score_modification(
    original: str,
    modified: str,
    threshold: Optional[float] = None,
) -> Tuple[float, KeyWords, str]:
    """
    Score a modified pair and explain it.

    Args:
        original: Original-side text
        modified: Modified-side text
        threshold: Wording threshold (defaults to DEFAULT_SIMILARITY_THRESHOLD)

    Returns:
        Tuple of (similarity, key_words, explanation)
    """
    if threshold is None:
        threshold = DEFAULT_SIMILARITY_THRESHOLD
    similarity = lexical_similarity(original, modified)
    key_words = extract_key_words(original, modified)
    return similarity, key_words, explain_change(similarity, key_words, threshold)


# Interpretation thresholds for lexical similarity scores.
# These are heuristics for display, not ground truth.
SIMILARITY_THRESHOLDS = {
    "near_identical": 0.90,  # >= 0.90: Cosmetic edit
    "reworded": 0.60,        # 0.60-0.90: Same content, different wording
    "rewritten": 0.30,       # 0.30-0.60: Substantial rewrite
    # < 0.30: Content replaced
}


def interpret_similarity(score: float) -> str:
    """
    Convert a similarity score to a human-readable label.

    Args:
        score: Lexical similarity score (0.0 to 1.0)

    Returns:
        One of "Near-identical", "Reworded", "Rewritten", "Replaced"
    """
    if score >= SIMILARITY_THRESHOLDS["near_identical"]:
        return "Near-identical"
    elif score >= SIMILARITY_THRESHOLDS["reworded"]:
        return "Reworded"
    elif score >= SIMILARITY_THRESHOLDS["rewritten"]:
        return "Rewritten"
    else:
        return "Replaced"
