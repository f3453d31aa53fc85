"""
Boundary services used by the surfaces around the diff engine.

These are explicitly constructed objects with a lifecycle owned by the
caller. The engine in textdiff.core never imports them.
"""

from textdiff.services.cache import DiffCache, CacheStats, make_cache_key
from textdiff.services.rate_limiter import RateLimiter, RateLimitDecision

__all__ = [
    "DiffCache",
    "CacheStats",
    "make_cache_key",
    "RateLimiter",
    "RateLimitDecision",
]
