"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around the read-modify-write of each entry.
- Entries are never removed; one entry per distinct client key is kept for
  the lifetime of the process.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _WindowState:
    window_start: float
    count: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed time window per key.

    A key's window opens at its first request and lasts ``window_seconds``.
    Once strictly more than ``window_seconds`` have elapsed since the window
    opened, the next request opens a fresh window with a zero count.

    Every call increments the counter, including calls that end up
    rejected, so a client hammering past its limit keeps its window full.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of admitted requests per window.
            window_seconds: Size of the fixed window in seconds.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def _get_or_reset_state(self, key: str, now: float) -> _WindowState:
        state = self._state_by_key.get(key)
        if state is None or now - state.window_start > self._window_seconds:
            state = _WindowState(window_start=now, count=0)
            self._state_by_key[key] = state
        return state

    def consume(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and decide whether to admit it.

        Args:
            key: Unique identifier for rate limiting.

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            state = self._get_or_reset_state(key, now)
            state.count += 1
            count = state.count
            reset_at = state.window_start + self._window_seconds

        remaining = max(0, self._limit - count)
        if count <= self._limit:
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=remaining,
                reset_at=int(math.ceil(reset_at)),
                retry_after_seconds=None,
            )

        return RateLimitResult(
            allowed=False,
            limit=self._limit,
            remaining=0,
            reset_at=int(math.ceil(reset_at)),
            retry_after_seconds=max(0, int(math.ceil(reset_at - now))),
        )
