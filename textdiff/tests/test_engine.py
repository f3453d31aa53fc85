"""Tests for the main diff engine.

These exercise the full pipeline: tokenize, normalize, align, classify
and (optionally) score modified pairs.
"""

import random

import pytest
from textdiff.core.engine import diff
from textdiff.core.models import (
    ChangeType,
    DiffOptions,
    DiffResult,
    Granularity,
    KeyWords,
)


def types_of(result: DiffResult) -> list:
    return [c.change_type for c in result.changes]


WORD = DiffOptions(granularity=Granularity.WORD)
LINE = DiffOptions(granularity=Granularity.LINE)


class TestBasicScenarios:
    """Concrete scenarios with known outputs."""

    def test_word_substitution(self):
        """'Hello world' -> 'Hello there' is one unchanged word and one modified pair."""
        result = diff("Hello world", "Hello there", WORD)

        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.MODIFIED]
        assert result.changes[0].original == "Hello"
        assert result.changes[0].modified == "Hello"
        assert result.changes[1].original == "world"
        assert result.changes[1].modified == "there"

    def test_line_appended(self):
        """Appending a line gives two unchanged lines then one added line."""
        result = diff("line1\nline2", "line1\nline2\nline3", LINE)

        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.UNCHANGED, ChangeType.ADDED]
        assert [c.modified_line for c in result.changes] == [1, 2, 3]
        assert [c.original_line for c in result.changes] == [1, 2, None]
        assert result.changes[2].modified == "line3"
        assert result.changes[2].original is None

    def test_semantic_modified_pair(self):
        """Semantic analysis scores a modified pair and extracts key words."""
        opts = DiffOptions(semantic_analysis=True)
        result = diff("The quick fox", "The fast fox", opts)

        assert types_of(result) == [ChangeType.MODIFIED]
        change = result.changes[0]
        assert change.similarity > 0
        assert "fast" in change.key_words.added
        assert "quick" in change.key_words.removed

    def test_semantic_values(self):
        """Similarity, key words and explanation for a known pair."""
        opts = DiffOptions(semantic_analysis=True)
        change = diff("The quick fox", "The fast fox", opts).changes[0]

        # jaccard 2/4, length ratio 12/13
        assert change.similarity == pytest.approx(0.7 * 0.5 + 0.3 * 12 / 13)
        assert change.key_words == KeyWords(added=("fast",), removed=("quick",))
        assert change.explanation == (
            'Reworded with 63% similarity. Key changes: added "fast" removed "quick"'
        )

    def test_threshold_changes_wording_only(self):
        """A high threshold switches the explanation but keeps the change."""
        opts = DiffOptions(semantic_analysis=True, similarity_threshold=0.9)
        result = diff("The quick fox", "The fast fox", opts)

        assert types_of(result) == [ChangeType.MODIFIED]
        assert result.changes[0].explanation == "Significantly modified. New focus: fast"

    def test_semantic_disabled_leaves_fields_empty(self):
        """Without semantic analysis, modified records carry no scoring."""
        change = diff("The quick fox", "The fast fox").changes[0]
        assert change.similarity is None
        assert change.explanation is None
        assert change.key_words is None

    def test_semantic_only_on_modified(self):
        """Unchanged, added and removed entries are never scored."""
        opts = DiffOptions(semantic_analysis=True)
        result = diff("same\nold", "same\nnew\nextra", opts)
        for change in result.changes:
            if change.change_type != ChangeType.MODIFIED:
                assert change.similarity is None
                assert change.key_words is None


class TestClassifierRules:
    """Tests for the three-pointer classification walk."""

    def test_insertion_before_anchor_is_added(self):
        """A token inserted before a common anchor is ADDED."""
        result = diff("a\nc", "a\nb\nc", LINE)

        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.ADDED, ChangeType.UNCHANGED]
        added = result.changes[1]
        assert added.modified == "b"
        assert added.modified_line == 2
        assert added.original_line is None
        assert result.changes[2].original_line == 2
        assert result.changes[2].modified_line == 3

    def test_deletion_before_anchor_is_removed(self):
        """A token deleted before a common anchor is REMOVED."""
        result = diff("a\nb\nc", "a\nc", LINE)

        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.REMOVED, ChangeType.UNCHANGED]
        removed = result.changes[1]
        assert removed.original == "b"
        assert removed.modified is None
        assert removed.original_line == 2
        assert removed.modified_line is None

    def test_swap_uses_fixed_tie_break(self):
        """Swapped lines: the LCS keeps 'b', so 'a' is removed then re-added."""
        result = diff("a\nb", "b\na", LINE)

        assert types_of(result) == [ChangeType.REMOVED, ChangeType.UNCHANGED, ChangeType.ADDED]
        assert result.changes[0].original == "a"
        assert result.changes[1].original == "b"
        assert result.changes[2].modified == "a"

    def test_remaining_original_drains_as_removed(self):
        result = diff("a b c", "a", WORD)
        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.REMOVED, ChangeType.REMOVED]

    def test_remaining_modified_drains_as_added(self):
        result = diff("", "hello world", WORD)
        assert types_of(result) == [ChangeType.ADDED, ChangeType.ADDED]

    def test_character_granularity(self):
        result = diff("abc", "abd", DiffOptions(granularity=Granularity.CHARACTER))
        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.UNCHANGED, ChangeType.MODIFIED]
        assert result.changes[2].original == "c"
        assert result.changes[2].modified == "d"

    def test_line_numbers_only_for_line_granularity(self):
        result = diff("a b", "a c", WORD)
        for change in result.changes:
            assert change.original_line is None
            assert change.modified_line is None

    def test_line_numbers_monotonic(self):
        """Line numbers increase independently on each side."""
        original = "one\ntwo\nthree\nfour\nfive"
        modified = "zero\none\nthree\n4\nfive\nsix"
        result = diff(original, modified, LINE)

        original_lines = [c.original_line for c in result.changes if c.original_line is not None]
        modified_lines = [c.modified_line for c in result.changes if c.modified_line is not None]
        assert original_lines == list(range(1, 6))
        assert modified_lines == list(range(1, 7))


class TestNormalizationOptions:
    """Tests for ignore_whitespace and ignore_case."""

    def test_ignore_case_matches_but_keeps_display(self):
        opts = DiffOptions(granularity=Granularity.WORD, ignore_case=True)
        result = diff("hello World", "Hello world", opts)

        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.UNCHANGED]
        assert result.changes[0].original == "hello"
        assert result.changes[0].modified == "Hello"

    def test_case_sensitive_by_default(self):
        result = diff("Hello", "hello", WORD)
        assert types_of(result) == [ChangeType.MODIFIED]

    def test_ignore_whitespace_lines(self):
        opts = DiffOptions(ignore_whitespace=True)
        result = diff("a  b\n  c", "a b\nc  ", opts)
        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.UNCHANGED]
        assert result.changes[0].original == "a  b"

    def test_whitespace_sensitive_by_default(self):
        result = diff("a  b", "a b")
        assert types_of(result) == [ChangeType.MODIFIED]


class TestInvariants:
    """Properties that hold for all inputs."""

    TEXTS = [
        "",
        "single",
        "Hello world. This is a test!\nSecond line here?\n\nNew paragraph.",
        "line one\r\nline two\r\n",
        "  spaced   out\ttext  ",
    ]

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_self_diff_all_unchanged(self, granularity):
        """diff(T, T) yields only unchanged entries."""
        opts = DiffOptions(granularity=granularity)
        for text in self.TEXTS:
            result = diff(text, text, opts)
            assert all(c.change_type == ChangeType.UNCHANGED for c in result.changes)
            assert not result.has_changes

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_empty_vs_empty(self, granularity):
        """Two empty texts give an empty change list and zero stats."""
        result = diff("", "", DiffOptions(granularity=granularity))
        assert result.changes == ()
        assert result.stats.as_dict() == {"added": 0, "removed": 0, "modified": 0, "unchanged": 0}

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_stats_sum_to_change_count(self, granularity):
        """added + removed + modified + unchanged == len(changes)."""
        rng = random.Random(granularity.value)
        vocabulary = ["alpha", "beta", "gamma.", "delta!", "\n", "\n\n", " ", "Eps?"]
        opts = DiffOptions(granularity=granularity, semantic_analysis=True)
        for _ in range(15):
            a = " ".join(rng.choice(vocabulary) for _ in range(rng.randint(0, 20)))
            b = " ".join(rng.choice(vocabulary) for _ in range(rng.randint(0, 20)))
            result = diff(a, b, opts)
            stats = result.stats
            assert stats.added + stats.removed + stats.modified + stats.unchanged == len(result.changes)

    def test_field_presence_by_type(self):
        """Text fields are present according to change type."""
        result = diff("keep\ndrop\nold", "keep\nnew\nextra\nmore", LINE)
        for change in result.changes:
            if change.change_type in (ChangeType.UNCHANGED, ChangeType.MODIFIED):
                assert change.original is not None and change.modified is not None
            elif change.change_type == ChangeType.REMOVED:
                assert change.original is not None and change.modified is None
            else:
                assert change.original is None and change.modified is not None

    def test_deterministic(self):
        """Repeated calls produce identical results."""
        opts = DiffOptions(granularity=Granularity.WORD, semantic_analysis=True)
        a = "The quick brown fox jumps over the lazy dog"
        b = "A quick red fox leaped over the sleepy dog today"
        assert diff(a, b, opts) == diff(a, b, opts)
        assert diff(a, b, opts).to_dict() == diff(a, b, opts).to_dict()

    def test_default_options(self):
        """diff() with no options uses line granularity."""
        result = diff("a\nb", "a\nc")
        assert types_of(result) == [ChangeType.UNCHANGED, ChangeType.MODIFIED]
        assert result.changes[1].original_line == 2
