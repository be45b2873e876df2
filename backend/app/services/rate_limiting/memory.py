"""In-process sliding-window rate limiter.

Counts are per process: with several workers or instances each keeps its own
window, so the effective ceiling is multiplied by the number of processes.
"""
from __future__ import annotations

import logging
import math
import time
from collections import deque
from threading import Lock
from typing import Callable, Deque, Dict

from app.services.rate_limiting.base import RateLimitDecision, RateLimiter

logger = logging.getLogger(__name__)


class InMemoryRateLimiter(RateLimiter):
    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            timestamps = self._hits.get(key)
            if timestamps is None:
                timestamps = deque()
            self._trim(timestamps, now)
            if len(timestamps) >= self.max_requests:
                retry_after = math.ceil(timestamps[0] + self.window_seconds - now)
                logger.warning("Rate limit reached for %s (%d requests in window)", key, len(timestamps))
                return RateLimitDecision(allowed=False, remaining=0, retry_after_seconds=max(retry_after, 1))
            timestamps.append(now)
            self._hits[key] = timestamps
            return RateLimitDecision(allowed=True, remaining=self.max_requests - len(timestamps))

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()

    def _trim(self, timestamps: Deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()

    def _sweep(self, now: float) -> None:
        # Idle keys are only dropped here, at most once per window.
        for key in list(self._hits):
            self._trim(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]
        self._last_sweep = now
