"""Rate limiter interfaces.

The API depends on this abstraction (not the concrete implementation)
so the storage backend can be swapped later with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a consume operation.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window ends.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and decide whether to admit it.

        Args:
            key: Client identifier (e.g., forwarded-for value, peer address).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError
