"""Helpers for stepping through the changed entries of a diff."""

from typing import List, Sequence

from textdiff.core.models import ChangeRecord


def find_next_change(changes: Sequence[ChangeRecord], current_index: int) -> int:
    """Index of the first changed entry after current_index, or -1."""
    for index in range(max(current_index + 1, 0), len(changes)):
        if changes[index].is_change:
            return index
    return -1


def find_previous_change(changes: Sequence[ChangeRecord], current_index: int) -> int:
    """Index of the last changed entry before current_index, or -1."""
    for index in range(min(current_index, len(changes)) - 1, -1, -1):
        if changes[index].is_change:
            return index
    return -1


def get_all_change_indices(changes: Sequence[ChangeRecord]) -> List[int]:
    """Indices of every entry that is not unchanged."""
    return [index for index, change in enumerate(changes) if change.is_change]
