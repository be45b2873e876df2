"""Rate limiter interface."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after_seconds: int | None = None


class RateLimiter:
    """Base interface for per-client request limiters."""

    def hit(self, key: str) -> RateLimitDecision:
        """Record a request for ``key`` if it fits within the limit."""
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError
