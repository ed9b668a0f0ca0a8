"""Tests for the fixed-window rate limiter."""

from insight_search.api.rate_limit import RateLimitMiddleware


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_limiter(clock: FakeClock, max_requests: int = 2, window_seconds: int = 60) -> RateLimitMiddleware:
    return RateLimitMiddleware(None, max_requests=max_requests, window_seconds=window_seconds, clock=clock)


def test_limit_resets_after_window():
    clock = FakeClock()
    limiter = make_limiter(clock)

    assert [limiter.hit("10.0.0.1") for _ in range(3)] == [True, True, False]

    clock.now = 60
    assert limiter.hit("10.0.0.1") is True


def test_expired_clients_are_evicted():
    clock = FakeClock()
    limiter = make_limiter(clock)

    for n in range(10_000):
        limiter.hit(f"client-{n}")
    assert len(limiter._windows) == 10_000

    clock.now = 600
    limiter.hit("late-client")

    assert list(limiter._windows) == ["late-client"]


def test_active_clients_survive_eviction():
    clock = FakeClock()
    limiter = make_limiter(clock)
    limiter.hit("stale")

    clock.now = 50
    limiter.hit("active")
    limiter.hit("active")

    clock.now = 70
    assert limiter.hit("active") is False

    assert "stale" not in limiter._windows
    assert limiter._windows["active"] == (50, 3)
