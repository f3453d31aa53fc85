"""
Chunked, incremental diffing for large inputs.

stream_diff() is a generator of DiffProgress events. Consumers pace it
by iterating and cancel it by simply stopping; nothing is held across
yields except the growing list of accumulated changes.

Strategy:
1. If len(original) + len(modified) exceeds STREAM_THRESHOLD_FACTOR x
   chunk_size, split both texts into fixed-size character chunks
2. Pair chunks by index; the side with fewer chunks pairs with ""
3. Diff each pair independently and append its changes
4. Yield one progress event per pair, then a final complete event

Small inputs are diffed once and still produce two events (50% and
100%, same result) so consumers see one protocol regardless of size.

Design Decisions:
- Chunk-local alignment: a change spanning a chunk boundary may be
  reported as two adjacent changes. This is accepted for large inputs.
- Line numbers restart in every chunk, since each chunk is diffed alone.
- Progress is the share of chunk pairs processed.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from textdiff.core.models import ChangeRecord, DiffOptions, DiffResult, DiffStats, DEFAULT_DIFF_OPTIONS
from textdiff.core.tokenizer import split_into_chunks
from textdiff.core.engine import diff

logger = logging.getLogger(__name__)


# Default chunk size in characters.
DEFAULT_STREAM_CHUNK_SIZE = 1000

# Inputs longer than this many chunks (both sides combined) are chunked.
STREAM_THRESHOLD_FACTOR = 10


@dataclass(frozen=True)
class DiffProgress:
    """
    One event from stream_diff().

    Attributes:
        progress: Percent complete (0-100)
        partial_result: Changes accumulated so far
        complete: True only on the final event
    """
    progress: float
    partial_result: Optional[DiffResult]
    complete: bool

    def to_dict(self) -> dict:
        """Serialize to the JSON wire shape."""
        return {
            "progress": self.progress,
            "partialResult": self.partial_result.to_dict() if self.partial_result is not None else None,
            "complete": self.complete,
        }


def should_chunk(original: str, modified: str, chunk_size: int = DEFAULT_STREAM_CHUNK_SIZE) -> bool:
    """Whether stream_diff() will take the chunked path for these inputs."""
    return len(original) + len(modified) > chunk_size * STREAM_THRESHOLD_FACTOR


def stream_diff(
    original: str,
    modified: str,
    options: Optional[DiffOptions] = None,
    chunk_size: int = DEFAULT_STREAM_CHUNK_SIZE,
) -> Iterator[DiffProgress]:
    """
    Diff two texts incrementally, yielding progress events.

    The sequence is finite, cannot be restarted and always ends with an
    event whose complete flag is True and whose partial_result holds the
    full result.

    Args:
        original: The original text
        modified: The modified text
        options: Diff configuration (defaults to DEFAULT_DIFF_OPTIONS)
        chunk_size: Characters per chunk on the chunked path

    Yields:
        DiffProgress events

    Raises:
        ValueError: If chunk_size is not positive

    Example:
        >>> for event in stream_diff(big_old, big_new, chunk_size=500):
        ...     print(f"{event.progress:.0f}%")
        ...     if event.complete:
        ...         result = event.partial_result
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if options is None:
        options = DEFAULT_DIFF_OPTIONS

    if not should_chunk(original, modified, chunk_size):
        result = diff(original, modified, options)
        yield DiffProgress(progress=50.0, partial_result=result, complete=False)
        yield DiffProgress(progress=100.0, partial_result=result, complete=True)
        return

    original_chunks = split_into_chunks(original, chunk_size)
    modified_chunks = split_into_chunks(modified, chunk_size)
    chunk_count = max(len(original_chunks), len(modified_chunks))
    logger.info(
        "Streaming diff over %d chunk pairs (chunk_size=%d, %d + %d chars)",
        chunk_count, chunk_size, len(original), len(modified),
    )

    # Running totals; stats.total always equals len(accumulated).
    accumulated: List[ChangeRecord] = []
    stats = DiffStats()
    for index in range(chunk_count):
        original_chunk = original_chunks[index] if index < len(original_chunks) else ""
        modified_chunk = modified_chunks[index] if index < len(modified_chunks) else ""

        chunk_result = diff(original_chunk, modified_chunk, options)
        accumulated.extend(chunk_result.changes)
        stats = stats + chunk_result.stats

        progress = (index + 1) / chunk_count * 100
        logger.debug("Chunk %d/%d: %d changes", index + 1, chunk_count, len(chunk_result.changes))
        yield DiffProgress(
            progress=progress,
            partial_result=DiffResult(changes=tuple(accumulated), stats=stats),
            complete=False,
        )

    yield DiffProgress(
        progress=100.0,
        partial_result=DiffResult(changes=tuple(accumulated), stats=stats),
        complete=True,
    )


def collect_stream(events: Iterator[DiffProgress]) -> DiffResult:
    """
    Drain a stream and return its final result.

    Raises:
        ValueError: If the stream ends without a complete event
    """
    for event in events:
        if event.complete and event.partial_result is not None:
            return event.partial_result
    raise ValueError("Stream ended without a complete event")
