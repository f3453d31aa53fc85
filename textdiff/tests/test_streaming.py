"""Tests for chunked streaming diffs."""

import logging

import pytest
from textdiff.core.engine import diff
from textdiff.core.models import ChangeType, DiffOptions, DiffStats, Granularity
from textdiff.core.streaming import (
    DiffProgress,
    collect_stream,
    should_chunk,
    stream_diff,
)


class TestShouldChunk:
    """Tests for the chunking threshold."""

    def test_combined_length(self):
        assert not should_chunk("a" * 10, "b" * 10, chunk_size=2)
        assert should_chunk("a" * 11, "b" * 10, chunk_size=2)

    def test_default_threshold(self):
        assert not should_chunk("x" * 5000, "y" * 5000)
        assert should_chunk("x" * 5000, "y" * 5001)


class TestSmallInputs:
    """Inputs below the threshold are diffed in one pass."""

    def test_two_events(self):
        events = list(stream_diff("a\nb", "a\nc"))
        assert [e.progress for e in events] == [50.0, 100.0]
        assert [e.complete for e in events] == [False, True]

    def test_same_result_as_diff(self):
        events = list(stream_diff("a\nb", "a\nc"))
        assert events[0].partial_result == events[1].partial_result
        assert events[1].partial_result == diff("a\nb", "a\nc")

    def test_options_passed_through(self):
        opts = DiffOptions(granularity=Granularity.WORD, ignore_case=True)
        result = collect_stream(stream_diff("Hello World", "hello world", opts))
        assert all(c.change_type == ChangeType.UNCHANGED for c in result.changes)
        assert len(result.changes) == 2

    def test_empty_inputs(self):
        events = list(stream_diff("", ""))
        assert len(events) == 2
        assert events[-1].partial_result.changes == ()


class TestChunkedInputs:
    """Inputs above the threshold are split into chunk pairs."""

    def test_progress_per_chunk_then_complete(self):
        text = "abcdefghijklmnopqrstu"  # 21 chars -> 11 chunks of 2
        events = list(stream_diff(text, text, chunk_size=2))

        assert len(events) == 12
        progresses = [e.progress for e in events[:-1]]
        assert progresses == pytest.approx([(i + 1) / 11 * 100 for i in range(11)])
        assert progresses == sorted(progresses)
        assert not any(e.complete for e in events[:-1])
        assert events[-1].complete
        assert events[-1].progress == 100.0

    def test_accumulates_changes(self):
        text = "abcdefghijklmnopqrstu"
        events = list(stream_diff(text, text, chunk_size=2))

        counts = [len(e.partial_result.changes) for e in events]
        assert counts[:-1] == list(range(1, 12))
        assert counts[-1] == 11
        final = events[-1].partial_result
        assert [c.original for c in final.changes][:2] == ["ab", "cd"]
        assert final.stats.unchanged == 11

    def test_stats_match_accumulated_changes(self):
        events = list(stream_diff("line\n" * 10, "line\n" * 8 + "edit\n", chunk_size=4))
        for event in events:
            result = event.partial_result
            assert result.stats.total == len(result.changes)
            assert result.stats == DiffStats.from_changes(result.changes)

    def test_shorter_side_pairs_with_empty(self):
        """Extra chunks on one side are diffed against empty text."""
        events = list(stream_diff("a" * 25, "", DiffOptions(granularity=Granularity.WORD), chunk_size=2))

        assert len(events) == 14  # 13 chunk pairs + complete
        final = events[-1].partial_result
        assert final.stats.removed == 13
        assert "".join(c.original for c in final.changes) == "a" * 25

    def test_character_chunks_reassemble(self):
        original = "The quick brown fox jumps over the lazy dog"
        modified = "The quick brown cat jumps over the lazy dog"
        opts = DiffOptions(granularity=Granularity.CHARACTER)
        result = collect_stream(stream_diff(original, modified, opts, chunk_size=4))

        assert "".join(c.original or "" for c in result.changes) == original
        assert "".join(c.modified or "" for c in result.changes) == modified
        assert result.stats.modified == 3

    def test_logs_chunk_count(self, caplog):
        caplog.set_level(logging.INFO, logger="textdiff.core.streaming")
        list(stream_diff("x" * 30, "y" * 30, chunk_size=5))
        assert "6 chunk pairs" in caplog.text


class TestStreamErrors:
    """Tests for invalid arguments and incomplete streams."""

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_non_positive_chunk_size(self, chunk_size):
        with pytest.raises(ValueError, match="positive"):
            list(stream_diff("a", "b", chunk_size=chunk_size))

    def test_error_raised_on_first_iteration(self):
        events = stream_diff("a", "b", chunk_size=0)
        with pytest.raises(ValueError):
            next(events)

    def test_collect_stream_without_complete_event(self):
        partial = [DiffProgress(progress=50.0, partial_result=None, complete=False)]
        with pytest.raises(ValueError, match="complete"):
            collect_stream(iter(partial))


class TestDiffProgress:
    """Tests for the event wire shape."""

    def test_to_dict(self):
        result = diff("a", "b")
        event = DiffProgress(progress=100.0, partial_result=result, complete=True)
        assert event.to_dict() == {
            "progress": 100.0,
            "partialResult": result.to_dict(),
            "complete": True,
        }

    def test_to_dict_without_result(self):
        event = DiffProgress(progress=0.0, partial_result=None, complete=False)
        assert event.to_dict()["partialResult"] is None
