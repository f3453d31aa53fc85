"""
Time-limited, size-bounded cache for diff results.

DiffCache is an explicitly constructed service: the surface that owns
it (for example the Streamlit app) creates one per process and passes
it where needed. The diff engine itself never touches it.

Keys are SHA-256 digests of the two texts plus the options that affect
the change list (granularity, ignore_whitespace, ignore_case). Entries
expire after a TTL; when full, the oldest entry is evicted first.
"""

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from textdiff.core.models import DiffOptions, DiffResult

logger = logging.getLogger(__name__)


DEFAULT_CACHE_TTL_SECONDS = 5 * 60
DEFAULT_CACHE_MAX_SIZE = 1000


@dataclass(frozen=True)
class _CacheEntry:
    result: DiffResult
    created_at: float
    expires_at: float


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache occupancy."""
    total: int
    active: int
    expired: int
    max_size: int


def make_cache_key(original: str, modified: str, options: DiffOptions) -> str:
    """
    Content hash of the inputs and the result-shaping options.

    Args:
        original: Original text
        modified: Modified text
        options: Diff options (only cache_key_fields() are used)

    Returns:
        Hex SHA-256 digest
    """
    payload = json.dumps(
        {
            "original": original,
            "modified": modified,
            "options": options.cache_key_fields(),
        },
        sort_keys=True,
        ensure_ascii=False,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class DiffCache:
    """
    In-memory diff result cache with TTL and oldest-first eviction.

    Args:
        ttl_seconds: Default lifetime of an entry
        max_size: Maximum number of entries held
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        max_size: int = DEFAULT_CACHE_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, original: str, modified: str, options: DiffOptions) -> Optional[DiffResult]:
        """Return a cached result, or None if absent or expired."""
        key = make_cache_key(original, modified, options)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires_at:
            del self._entries[key]
            return None

        return entry.result

    def set(
        self,
        original: str,
        modified: str,
        options: DiffOptions,
        result: DiffResult,
        ttl: Optional[float] = None,
    ) -> None:
        """Store a result, evicting the oldest entry if the cache is full."""
        key = make_cache_key(original, modified, options)
        if key not in self._entries and len(self._entries) >= self.max_size:
            self._evict_oldest()

        now = self._clock()
        self._entries[key] = _CacheEntry(
            result=result,
            created_at=now,
            expires_at=now + (ttl if ttl is not None else self.ttl_seconds),
        )

    def _evict_oldest(self) -> None:
        oldest_key = min(self._entries, key=lambda k: self._entries[k].created_at)
        del self._entries[oldest_key]
        logger.info("Cache full (%d entries), evicted oldest entry", self.max_size)

    def cleanup(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info("Cache cleanup: removed %d expired entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def stats(self) -> CacheStats:
        """Count active and expired entries without removing any."""
        now = self._clock()
        expired = sum(1 for entry in self._entries.values() if now > entry.expires_at)
        return CacheStats(
            total=len(self._entries),
            active=len(self._entries) - expired,
            expired=expired,
            max_size=self.max_size,
        )
