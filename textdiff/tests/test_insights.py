"""Tests for diff insights."""

from textdiff.core.insights import DiffInsights, compute_diff_insights, find_largest_change
from textdiff.core.models import ChangeRecord, ChangeType, DiffResult


def make_result(*records) -> DiffResult:
    return DiffResult.from_changes(records)


def unchanged(text="same") -> ChangeRecord:
    return ChangeRecord(ChangeType.UNCHANGED, original=text, modified=text)


def added(text) -> ChangeRecord:
    return ChangeRecord(ChangeType.ADDED, modified=text)


def removed(text) -> ChangeRecord:
    return ChangeRecord(ChangeType.REMOVED, original=text)


def modified(old, new) -> ChangeRecord:
    return ChangeRecord(ChangeType.MODIFIED, original=old, modified=new)


class TestComputeDiffInsights:
    """Tests for aggregate insights."""

    def test_empty_result(self):
        insights = compute_diff_insights(DiffResult())
        assert insights == DiffInsights(
            total_changes=0,
            change_percentage=0.0,
            similarity=100.0,
            largest_change=None,
            change_distribution={"added": 0, "removed": 0, "modified": 0, "unchanged": 0},
        )

    def test_percentages(self):
        result = make_result(unchanged(), unchanged(), unchanged(), added("new"))
        insights = compute_diff_insights(result)
        assert insights.total_changes == 1
        assert insights.change_percentage == 25.0
        assert insights.similarity == 75.0

    def test_rounded_to_two_decimals(self):
        result = make_result(unchanged(), unchanged(), removed("x"))
        insights = compute_diff_insights(result)
        assert insights.change_percentage == 33.33
        assert insights.similarity == 66.67

    def test_all_unchanged(self):
        insights = compute_diff_insights(make_result(unchanged(), unchanged()))
        assert insights.total_changes == 0
        assert insights.change_percentage == 0.0
        assert insights.similarity == 100.0
        assert insights.largest_change is None

    def test_distribution_matches_stats(self):
        result = make_result(added("a"), added("b"), modified("c", "d"), unchanged())
        insights = compute_diff_insights(result)
        assert insights.change_distribution == {
            "added": 2, "removed": 0, "modified": 1, "unchanged": 1,
        }


class TestFindLargestChange:
    """Tests for the largest change lookup."""

    def test_longer_side_counts(self):
        big = modified("short", "a much longer replacement")
        result = make_result(added("twelve chars"), big, removed("tiny"))
        assert find_largest_change(result) is big

    def test_unchanged_ignored(self):
        result = make_result(unchanged("a very very long unchanged line"), added("ab"))
        assert find_largest_change(result).modified == "ab"

    def test_first_wins_ties(self):
        first = added("abc")
        result = make_result(first, removed("xyz"), modified("def", "ghi"))
        assert find_largest_change(result) is first

    def test_zero_length_change_still_found(self):
        """A blank-line change is still a change."""
        blank = added("")
        assert find_largest_change(make_result(unchanged(), blank)) is blank

    def test_none_when_nothing_changed(self):
        assert find_largest_change(make_result(unchanged())) is None
