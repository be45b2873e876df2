from __future__ import annotations

import random

import pytest

from app.services.rate_limiting import InMemoryRateLimiter


class _FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_rejects_request_past_ceiling_then_admits_after_window() -> None:
    clock = _FakeClock()
    limiter = InMemoryRateLimiter(max_requests=5, window_seconds=60, clock=clock)
    rng = random.Random(42)

    for _ in range(5):
        assert limiter.hit("10.0.0.1").allowed
        clock.advance(rng.uniform(0, 5))

    rejected = limiter.hit("10.0.0.1")
    assert rejected.allowed is False
    assert rejected.remaining == 0
    assert rejected.retry_after_seconds >= 1

    clock.advance(61)
    assert limiter.hit("10.0.0.1").allowed


def test_keys_are_counted_independently() -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=_FakeClock())

    assert limiter.hit("a").allowed
    assert not limiter.hit("a").allowed
    assert limiter.hit("b").allowed


def test_remaining_counts_down() -> None:
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60, clock=_FakeClock())

    assert [limiter.hit("a").remaining for _ in range(3)] == [2, 1, 0]


def test_rejected_requests_do_not_extend_the_window() -> None:
    clock = _FakeClock()
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=10, clock=clock)

    assert limiter.hit("a").allowed
    clock.advance(5)
    assert not limiter.hit("a").allowed
    clock.advance(5)
    assert limiter.hit("a").allowed


def test_idle_keys_dropped_once_a_window_has_passed() -> None:
    clock = _FakeClock()
    limiter = InMemoryRateLimiter(max_requests=2, window_seconds=10, clock=clock)
    limiter.hit("a")
    limiter.hit("b")
    assert set(limiter._hits) == {"a", "b"}

    clock.advance(11)
    limiter.hit("c")

    assert set(limiter._hits) == {"c"}


def test_idle_keys_kept_until_sweep_is_due() -> None:
    clock = _FakeClock()
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=10, clock=clock)
    clock.advance(6)
    limiter.hit("a")
    clock.advance(5)
    limiter.hit("b")  # sweep runs here, "a" is still inside its window
    clock.advance(6)

    limiter.hit("c")
    assert set(limiter._hits) == {"a", "b", "c"}

    assert limiter.hit("a").allowed
    assert len(limiter._hits["a"]) == 1


def test_reset_clears_state() -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=_FakeClock())
    limiter.hit("a")
    limiter.reset()

    assert limiter.hit("a").allowed


@pytest.mark.parametrize("kwargs", [{"max_requests": 0, "window_seconds": 1}, {"max_requests": 1, "window_seconds": 0}])
def test_invalid_configuration_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        InMemoryRateLimiter(**kwargs)
