"""Rate limiter factory."""
from __future__ import annotations

import logging
from functools import lru_cache

from app.core.config import settings
from app.services.rate_limiting.base import RateLimiter
from app.services.rate_limiting.memory import InMemoryRateLimiter

logger = logging.getLogger(__name__)


@lru_cache
def get_rate_limiter() -> RateLimiter:
    provider = settings.rate_limit_provider.lower()
    if provider != "memory":
        logger.warning("Unknown rate limit provider %r; falling back to in-memory limiter.", provider)
    return InMemoryRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
