"""Tests for change navigation."""

import pytest
from textdiff.core.models import ChangeRecord, ChangeType
from textdiff.core.navigation import (
    find_next_change,
    find_previous_change,
    get_all_change_indices,
)


@pytest.fixture
def changes():
    """Changes at indices 1, 3 and 4."""
    same = ChangeRecord(ChangeType.UNCHANGED, original="x", modified="x")
    return [
        same,
        ChangeRecord(ChangeType.ADDED, modified="a"),
        same,
        ChangeRecord(ChangeType.REMOVED, original="r"),
        ChangeRecord(ChangeType.MODIFIED, original="m", modified="n"),
        same,
    ]


class TestNavigation:
    """Tests for stepping between changes."""

    def test_all_indices(self, changes):
        assert get_all_change_indices(changes) == [1, 3, 4]

    def test_next_from_start(self, changes):
        assert find_next_change(changes, -1) == 1

    def test_next_skips_current(self, changes):
        assert find_next_change(changes, 1) == 3
        assert find_next_change(changes, 3) == 4

    def test_next_at_end(self, changes):
        assert find_next_change(changes, 4) == -1
        assert find_next_change(changes, 10) == -1

    def test_previous(self, changes):
        assert find_previous_change(changes, 4) == 3
        assert find_previous_change(changes, 3) == 1

    def test_previous_at_start(self, changes):
        assert find_previous_change(changes, 1) == -1
        assert find_previous_change(changes, 0) == -1

    def test_previous_from_past_end(self, changes):
        assert find_previous_change(changes, 100) == 4

    def test_no_changes(self):
        same = [ChangeRecord(ChangeType.UNCHANGED, original="x", modified="x")] * 3
        assert get_all_change_indices(same) == []
        assert find_next_change(same, -1) == -1
        assert find_previous_change(same, 3) == -1
