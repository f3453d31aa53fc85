"""
Fixed-window request counting per caller identity.

A window opens on an identity's first request and lasts window_seconds.
Up to max_requests are allowed inside it; later requests are rejected
until the window resets. RateLimiter instances are created by the
surface that enforces them and are never shared module state.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict

logger = logging.getLogger(__name__)


# Limits for diff computations and for lightweight API calls.
DIFF_RATE_LIMIT = 200
API_RATE_LIMIT = 1000
DEFAULT_WINDOW_SECONDS = 60


@dataclass
class _Window:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    """
    Outcome of a rate-limit check.

    Attributes:
        allowed: Whether the request may proceed
        remaining: Requests left in the current window
        reset_at: Clock time when the window resets
    """
    allowed: bool
    remaining: int
    reset_at: float


@dataclass(frozen=True)
class RateLimiterStats:
    active_windows: int
    max_requests: int
    window_seconds: float


class RateLimiter:
    """
    Fixed-window rate limiter.

    Args:
        max_requests: Requests allowed per window
        window_seconds: Window length
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        max_requests: int = DIFF_RATE_LIMIT,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {max_requests}")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def check(self, identity: str) -> RateLimitDecision:
        """
        Count a request from identity and decide whether it is allowed.

        Args:
            identity: Caller key (client address, API key, session id)

        Returns:
            RateLimitDecision
        """
        now = self._clock()
        window = self._windows.get(identity)

        if window is None or now > window.reset_at:
            window = _Window(count=1, reset_at=now + self.window_seconds)
            self._windows[identity] = window
            return RateLimitDecision(
                allowed=True,
                remaining=self.max_requests - 1,
                reset_at=window.reset_at,
            )

        if window.count >= self.max_requests:
            logger.warning("Rate limit exceeded for %s", identity)
            return RateLimitDecision(allowed=False, remaining=0, reset_at=window.reset_at)

        window.count += 1
        return RateLimitDecision(
            allowed=True,
            remaining=self.max_requests - window.count,
            reset_at=window.reset_at,
        )

    def cleanup(self) -> int:
        """Drop windows that have already reset. Returns how many were dropped."""
        now = self._clock()
        stale = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in stale:
            del self._windows[key]
        return len(stale)

    def stats(self) -> RateLimiterStats:
        return RateLimiterStats(
            active_windows=len(self._windows),
            max_requests=self.max_requests,
            window_seconds=self.window_seconds,
        )
