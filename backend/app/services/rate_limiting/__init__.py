"""Per-client request rate limiting."""

from app.services.rate_limiting.base import RateLimitDecision, RateLimiter
from app.services.rate_limiting.factory import get_rate_limiter
from app.services.rate_limiting.memory import InMemoryRateLimiter

__all__ = ["InMemoryRateLimiter", "RateLimitDecision", "RateLimiter", "get_rate_limiter"]
