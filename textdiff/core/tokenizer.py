"""
Normalization and tokenization for text comparison.

This module turns raw text into the ordered token sequences that the
aligner compares. It has two halves:

Normalization:
Tokens are compared in a normalized form (whitespace collapsed and/or
lower-cased, depending on options) but always displayed in their
original form. normalize() is only ever used for equality checks.

Tokenization:
Text is split according to a Granularity:
- CHARACTER: one token per Unicode code point (not UTF-16 code unit, not
  grapheme cluster)
- WORD: whitespace runs are separators and are not emitted
- LINE: \\n and \\r\\n are equivalent; a trailing line break yields a
  trailing empty token, like naive line splitting
- SENTENCE: split on runs of . ! ? followed by whitespace; each such
  separator is a token of its own
- PARAGRAPH: split on one or more blank lines

Design Decisions:
- Regex only, no NLP dependencies (sentence splitting is approximate)
- Sentence separators are kept, so joining the tokens restores any text
  that is not whitespace-only
- Empty and whitespace-only sentences/paragraphs are dropped

The module also provides split_into_chunks(), the fixed-size character
chunking used by the streaming coordinator for very large inputs.
"""

import re
from typing import List, Sequence

from textdiff.core.models import DiffOptions, Granularity


_WHITESPACE_RUN = re.compile(r'\s+')
_LINE_BREAK = re.compile(r'\r?\n')
# .!? runs followed by whitespace, captured so the separators survive the
# split. Abbreviations like "U.S." stay intact because no whitespace
# follows the inner period.
_SENTENCE_BREAK = re.compile(r'([.!?]+\s+)')
_PARAGRAPH_BREAK = re.compile(r'\n\s*\n')


def normalize(text: str, options: DiffOptions) -> str:
    """
    Normalize a token for equality comparison.

    Args:
        text: Raw token text
        options: Diff options (ignore_whitespace, ignore_case are used)

    Returns:
        Normalized text
    """
    normalized = text
    if options.ignore_whitespace:
        normalized = _WHITESPACE_RUN.sub(' ', normalized).strip()
    if options.ignore_case:
        normalized = normalized.lower()
    return normalized


def normalize_tokens(tokens: Sequence[str], options: DiffOptions) -> List[str]:
    """Normalize every token in a sequence, preserving order."""
    if not options.ignore_whitespace and not options.ignore_case:
        return list(tokens)
    return [normalize(token, options) for token in tokens]


def _split_into_sentences(text: str) -> List[str]:
    """
    Split text into sentence bodies and separators using simple regex.

    Args:
        text: Input text

    Returns:
        Sentence bodies interleaved with their separators, e.g.
        "Hi. There" -> ["Hi", ". ", "There"]
    """
    sentences = _SENTENCE_BREAK.split(text)
    return [s for s in sentences if s.strip()]


def _split_into_paragraphs(text: str) -> List[str]:
    """
    Split text into paragraphs based on blank lines.

    Unlike sentences, paragraphs keep their inner whitespace untouched
    so that ignore_whitespace remains meaningful for them.
    """
    paragraphs = _PARAGRAPH_BREAK.split(text)
    return [p for p in paragraphs if p.strip()]


def tokenize(text: str, granularity: Granularity) -> List[str]:
    """
    Split text into an ordered sequence of tokens.

    Args:
        text: The text to split
        granularity: Unit of tokenization

    Returns:
        List of token strings in document order

    Example:
        >>> tokenize("Hello   world", Granularity.WORD)
        ['Hello', 'world']
        >>> tokenize("a\\r\\nb\\n", Granularity.LINE)
        ['a', 'b', '']
    """
    if granularity == Granularity.CHARACTER:
        return list(text)
    elif granularity == Granularity.WORD:
        return text.split()
    elif granularity == Granularity.LINE:
        return _LINE_BREAK.split(text)
    elif granularity == Granularity.SENTENCE:
        return _split_into_sentences(text)
    elif granularity == Granularity.PARAGRAPH:
        return _split_into_paragraphs(text)
    else:
        return [text]


def split_into_chunks(text: str, chunk_size: int) -> List[str]:
    """
    Split text into fixed-size character chunks.

    The final chunk may be shorter than chunk_size. Empty text produces
    an empty list, so a missing side pairs with empty strings downstream.

    Args:
        text: Text to split
        chunk_size: Characters per chunk (must be positive)

    Returns:
        List of chunk strings whose concatenation equals text

    Raises:
        ValueError: If chunk_size is not positive
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [text[start:start + chunk_size] for start in range(0, len(text), chunk_size)]
