"""Tests for the fixed-window rate limiter."""

import logging

import pytest
from textdiff.services.rate_limiter import (
    API_RATE_LIMIT,
    DIFF_RATE_LIMIT,
    RateLimiter,
    RateLimitDecision,
)


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(max_requests=3, window_seconds=60, clock=clock)


class TestRateLimiter:
    """Tests for window counting."""

    def test_defaults(self):
        limiter = RateLimiter()
        assert limiter.max_requests == DIFF_RATE_LIMIT == 200
        assert limiter.window_seconds == 60
        assert API_RATE_LIMIT == 1000

    def test_first_request_opens_window(self, limiter):
        assert limiter.check("alice") == RateLimitDecision(allowed=True, remaining=2, reset_at=60)

    def test_counts_down_then_rejects(self, limiter):
        decisions = [limiter.check("alice") for _ in range(5)]
        assert [d.allowed for d in decisions] == [True, True, True, False, False]
        assert [d.remaining for d in decisions] == [2, 1, 0, 0, 0]

    def test_identities_independent(self, limiter):
        for _ in range(3):
            limiter.check("alice")
        assert not limiter.check("alice").allowed
        assert limiter.check("bob").allowed

    def test_window_resets(self, limiter, clock):
        for _ in range(4):
            limiter.check("alice")
        clock.advance(60)
        assert not limiter.check("alice").allowed

        clock.advance(1)
        decision = limiter.check("alice")
        assert decision.allowed
        assert decision.remaining == 2
        assert decision.reset_at == 121

    def test_rejection_logged(self, limiter, caplog):
        caplog.set_level(logging.WARNING, logger="textdiff.services.rate_limiter")
        for _ in range(4):
            limiter.check("alice")
        assert "Rate limit exceeded for alice" in caplog.text

    def test_cleanup(self, limiter, clock):
        limiter.check("alice")
        clock.advance(30)
        limiter.check("bob")
        clock.advance(31)

        assert limiter.cleanup() == 1
        assert limiter.stats().active_windows == 1

    def test_stats(self, limiter):
        limiter.check("alice")
        limiter.check("bob")
        stats = limiter.stats()
        assert stats.active_windows == 2
        assert stats.max_requests == 3
        assert stats.window_seconds == 60

    def test_invalid_max_requests(self):
        with pytest.raises(ValueError, match="positive"):
            RateLimiter(max_requests=0)
