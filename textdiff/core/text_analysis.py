"""
Descriptive statistics for a single text.

Used alongside a diff to describe each side: counts, averages, a
Flesch-like readability score and the most frequent key terms.

Readability Formula:
    score = 206.835 - 1.015 * words_per_sentence - 84.6 * chars_per_word

This uses characters per word in place of syllables, so scores run
lower than true Flesch reading ease. Treat it as a relative measure
for comparing two versions of the same text.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import List


# Readability bands, checked in order (score >= bound).
READABILITY_LEVELS = [
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
]
LOWEST_READABILITY_LEVEL = "Very Difficult"

# Key terms must be longer than this and not a common word.
MIN_KEY_TERM_LENGTH = 4
MAX_KEY_TERMS = 10

COMMON_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "may", "might", "must", "can", "this", "that", "these", "those", "i",
    "you", "he", "she", "it", "we", "they",
])

_WORD = re.compile(r'\w+')
_SENTENCE_END = re.compile(r'[.!?]+')
_PARAGRAPH_BREAK = re.compile(r'\n\s*\n')
_WHITESPACE = re.compile(r'\s')


@dataclass(frozen=True)
class TextAnalysis:
    """
    Statistics for one text.

    Attributes:
        word_count: Number of alphanumeric words
        sentence_count: Non-empty segments between . ! ? runs
        paragraph_count: Non-empty blocks between blank lines
        average_words_per_sentence: Rounded to 2 decimals
        average_chars_per_word: Non-whitespace chars per word, 2 decimals
        readability_score: Flesch-like score, 2 decimals
        readability_level: Band label for the score
        key_terms: Up to 10 most frequent significant words
    """
    word_count: int
    sentence_count: int
    paragraph_count: int
    average_words_per_sentence: float
    average_chars_per_word: float
    readability_score: float
    readability_level: str
    key_terms: List[str]


def _round2(value: float) -> float:
    return round(value, 2)


def interpret_readability(score: float) -> str:
    """Convert a readability score to its band label."""
    for bound, label in READABILITY_LEVELS:
        if score >= bound:
            return label
    return LOWEST_READABILITY_LEVEL


def extract_key_terms(words: List[str], limit: int = MAX_KEY_TERMS) -> List[str]:
    """
    Most frequent significant words, lower-cased.

    Ties keep first-occurrence order.
    """
    counts = Counter(
        word.lower() for word in words
        if len(word) > MIN_KEY_TERM_LENGTH and word.lower() not in COMMON_WORDS
    )
    return [word for word, _ in counts.most_common(limit)]


def analyze_text(text: str) -> TextAnalysis:
    """
    Compute descriptive statistics for a text.

    Args:
        text: Any text, including empty

    Returns:
        TextAnalysis
    """
    words = _WORD.findall(text)
    sentences = [s for s in _SENTENCE_END.split(text) if s.strip()]
    paragraphs = [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]

    word_count = len(words)
    sentence_count = len(sentences)
    words_per_sentence = word_count / sentence_count if sentence_count > 0 else 0.0
    chars_per_word = len(_WHITESPACE.sub("", text)) / word_count if word_count > 0 else 0.0

    score = 206.835 - (1.015 * words_per_sentence) - (84.6 * chars_per_word)

    return TextAnalysis(
        word_count=word_count,
        sentence_count=sentence_count,
        paragraph_count=len(paragraphs),
        average_words_per_sentence=_round2(words_per_sentence),
        average_chars_per_word=_round2(chars_per_word),
        readability_score=_round2(score),
        readability_level=interpret_readability(score),
        key_terms=extract_key_terms(words),
    )
