"""
Character-level highlighting for a pair of strings.

This is a synchronized walk, not an alignment: position k of the
original is compared with position k of the modified text. It is
meant for coloring the inside of a modified pair, not for diffing.
"""

from dataclasses import dataclass
from typing import List

from textdiff.core.models import ChangeType


@dataclass(frozen=True)
class CharTag:
    """A single character tagged UNCHANGED, ADDED or REMOVED."""
    char: str
    change_type: ChangeType


@dataclass(frozen=True)
class CharacterDiff:
    """
    Tagged characters for both sides.

    Attributes:
        original: Original characters, tagged UNCHANGED or REMOVED
        modified: Modified characters, tagged UNCHANGED or ADDED
    """
    original: List[CharTag]
    modified: List[CharTag]


def compute_character_diff(original: str, modified: str) -> CharacterDiff:
    """
    Tag each character of both strings for highlighting.

    Equal characters at the same position are UNCHANGED on both sides.
    Differing characters are REMOVED on the original side and ADDED on
    the modified side. Characters past the end of the shorter string
    are REMOVED or ADDED.

    Args:
        original: Original-side string
        modified: Modified-side string

    Returns:
        CharacterDiff with one tag per character on each side
    """
    original_tags: List[CharTag] = []
    modified_tags: List[CharTag] = []

    for index in range(max(len(original), len(modified))):
        if index >= len(original):
            modified_tags.append(CharTag(modified[index], ChangeType.ADDED))
        elif index >= len(modified):
            original_tags.append(CharTag(original[index], ChangeType.REMOVED))
        elif original[index] == modified[index]:
            original_tags.append(CharTag(original[index], ChangeType.UNCHANGED))
            modified_tags.append(CharTag(modified[index], ChangeType.UNCHANGED))
        else:
            original_tags.append(CharTag(original[index], ChangeType.REMOVED))
            modified_tags.append(CharTag(modified[index], ChangeType.ADDED))

    return CharacterDiff(original=original_tags, modified=modified_tags)
