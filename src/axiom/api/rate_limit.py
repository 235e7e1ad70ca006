"""
In-Memory Rate Limiting

Fixed-window request counters keyed by the authenticated user id (set on
``request.state.user_id`` by an auth layer) or the client address. Client
headers never choose the key. Single-process only; counters live in a dict
guarded by a lock and expired windows are swept lazily.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from fastapi import Request, Response

from axiom.config import RateLimitSettings
from axiom.core.exceptions import RateLimitExceededError
from axiom.observability.metrics import get_axiom_metrics

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Too many requests, please try again later."
ANALYSIS_MESSAGE = "Analysis rate limit exceeded. Please wait before running another analysis."

API_LIMITER = "api"
ANALYSIS_LIMITER = "analysis"


@dataclass
class _Window:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitState:
    """Counter state after admitting a request."""

    limit: int
    remaining: int
    reset_at: float

    def headers(self) -> dict[str, str]:
        return rate_limit_headers(self.limit, self.remaining, self.reset_at)


def rate_limit_headers(limit: int, remaining: int, reset_at: float) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": str(max(0, remaining)),
        "X-RateLimit-Reset": str(math.ceil(reset_at)),
    }


class RateLimiter:
    """
    Fixed-window rate limiter.

    Usage:
        limiter = RateLimiter(window_seconds=60, max_requests=100)
        state = limiter.acquire("user-1")  # raises RateLimitExceededError when over
    """

    def __init__(
        self,
        window_seconds: float,
        max_requests: int,
        message: str = DEFAULT_MESSAGE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.message = message
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._next_sweep = clock() + window_seconds
        self._lock = Lock()

    def acquire(self, key: str) -> RateLimitState:
        """
        Count one request for ``key``.

        Raises:
            RateLimitExceededError: If the key is over budget for the window.
        """
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)

            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                window = _Window(count=0, reset_at=now + self.window_seconds)
                self._windows[key] = window
            window.count += 1
            count, reset_at = window.count, window.reset_at

        if count > self.max_requests:
            logger.warning("Rate limit exceeded for %s (%d/%d)", key, count, self.max_requests)
            raise RateLimitExceededError(key, self.max_requests, reset_at, self.message)

        return RateLimitState(
            limit=self.max_requests, remaining=self.max_requests - count, reset_at=reset_at
        )

    def _sweep(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now >= window.reset_at]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self.window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)


def client_key(request: Request) -> str:
    """Authenticated user id from ``request.state``, else client address, else "unknown"."""
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def build_rate_limiters(settings: RateLimitSettings) -> dict[str, RateLimiter]:
    """General API limiter plus the stricter limiter for LLM-backed analysis."""
    return {
        API_LIMITER: RateLimiter(settings.window_seconds, settings.api_max_requests),
        ANALYSIS_LIMITER: RateLimiter(
            settings.window_seconds, settings.analysis_max_requests, ANALYSIS_MESSAGE
        ),
    }


def rate_limit(name: str) -> Callable[[Request, Response], None]:
    """
    FastAPI dependency enforcing the app's limiter called ``name``.

    Limiters are looked up on ``app.state.rate_limiters`` so every app
    instance keeps its own counters.
    """

    def dependency(request: Request, response: Response) -> None:
        limiter: RateLimiter = request.app.state.rate_limiters[name]
        try:
            state = limiter.acquire(client_key(request))
        except RateLimitExceededError:
            get_axiom_metrics().rate_limited.inc(labels={"limiter": name})
            raise
        response.headers.update(state.headers())

    return dependency
