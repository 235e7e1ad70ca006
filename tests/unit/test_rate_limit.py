"""
Unit Tests for the In-Memory Rate Limiter
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from axiom.api.rate_limit import (
    ANALYSIS_LIMITER,
    ANALYSIS_MESSAGE,
    API_LIMITER,
    DEFAULT_MESSAGE,
    RateLimiter,
    build_rate_limiters,
    client_key,
    rate_limit_headers,
)
from axiom.config import RateLimitSettings
from axiom.core.exceptions import RateLimitExceededError


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestRateLimiter:
    """Tests for fixed-window counting."""

    def test_admits_up_to_limit(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 3, clock=clock)
        states = [limiter.acquire("u1") for _ in range(3)]
        assert [s.remaining for s in states] == [2, 1, 0]
        assert all(s.reset_at == 1060.0 for s in states)

    def test_rejects_over_limit(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 2, clock=clock)
        limiter.acquire("u1")
        limiter.acquire("u1")
        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.acquire("u1")
        assert exc_info.value.message == DEFAULT_MESSAGE
        assert exc_info.value.limit == 2
        assert exc_info.value.reset_at == 1060.0

    def test_keys_are_independent(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 1, clock=clock)
        limiter.acquire("u1")
        assert limiter.acquire("u2").remaining == 0

    def test_window_resets(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 1, clock=clock)
        limiter.acquire("u1")
        clock.now += 60
        state = limiter.acquire("u1")
        assert state.remaining == 0
        assert state.reset_at == 1120.0

    def test_custom_message(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 1, ANALYSIS_MESSAGE, clock=clock)
        limiter.acquire("u1")
        with pytest.raises(RateLimitExceededError, match="Analysis rate limit exceeded"):
            limiter.acquire("u1")

    def test_expired_windows_swept(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 5, clock=clock)
        limiter.acquire("u1")
        limiter.acquire("u2")
        assert len(limiter) == 2
        clock.now += 61
        limiter.acquire("u3")
        assert len(limiter) == 1

    def test_no_sweep_before_window_elapses(self, clock: FakeClock) -> None:
        limiter = RateLimiter(60, 5, clock=clock)
        limiter.acquire("u1")
        clock.now += 59
        limiter.acquire("u2")
        assert len(limiter) == 2


class TestClientKey:
    """Tests for choosing the counter key of a request."""

    @staticmethod
    def make_request(host: str | None = "10.0.0.1", headers: dict | None = None, **state):
        client = SimpleNamespace(host=host) if host else None
        return SimpleNamespace(client=client, headers=headers or {}, state=SimpleNamespace(**state))

    def test_client_address(self) -> None:
        assert client_key(self.make_request()) == "10.0.0.1"

    def test_user_id_header_ignored(self) -> None:
        request = self.make_request(headers={"X-User-Id": "alice"})
        assert client_key(request) == "10.0.0.1"

    def test_authenticated_user_id(self) -> None:
        assert client_key(self.make_request(user_id="alice")) == "user:alice"

    def test_unknown_client(self) -> None:
        assert client_key(self.make_request(host=None)) == "unknown"


class TestHelpers:
    def test_headers(self) -> None:
        assert rate_limit_headers(100, 99, 1060.2) == {
            "X-RateLimit-Limit": "100",
            "X-RateLimit-Remaining": "99",
            "X-RateLimit-Reset": "1061",
        }

    def test_remaining_never_negative(self) -> None:
        assert rate_limit_headers(5, -3, 0)["X-RateLimit-Remaining"] == "0"

    def test_build_rate_limiters(self) -> None:
        limiters = build_rate_limiters(RateLimitSettings())
        assert limiters[API_LIMITER].max_requests == 100
        assert limiters[ANALYSIS_LIMITER].max_requests == 5
        assert limiters[ANALYSIS_LIMITER].message == ANALYSIS_MESSAGE
        assert limiters[API_LIMITER].window_seconds == 60.0
