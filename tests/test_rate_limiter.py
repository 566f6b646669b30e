"""SlidingWindowRateLimiter のユニットテスト"""

import asyncio

import pytest
from pubg_client import ManualClock, SlidingWindowRateLimiter


async def test_admit_under_limit_does_not_wait() -> None:
    """上限未満なら待たずに許可されること。"""
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=10, window=1.0, clock=clock)
    for _ in range(10):
        await limiter.admit()
    assert clock.sleeps == []
    assert limiter.pending() == 10


async def test_eleventh_admit_waits_for_window() -> None:
    """11 回目は 1 回目から 1 秒経過するまで許可されないこと。"""
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=10, window=1.0, clock=clock)
    admitted = [await limiter.admit() for _ in range(11)]
    assert admitted[10] - admitted[0] >= 1.0
    assert clock.sleeps == [pytest.approx(1.0)]
    assert clock.now() >= 1.0


async def test_wait_is_measured_from_oldest_entry() -> None:
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=2, window=1.0, clock=clock)
    await limiter.admit()
    clock.advance(0.4)
    await limiter.admit()
    clock.advance(0.1)
    admitted = await limiter.admit()
    assert clock.sleeps == [pytest.approx(0.5)]
    assert admitted == pytest.approx(1.0)


async def test_old_entries_are_purged() -> None:
    """ウィンドウ外のエントリは破棄されること。"""
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=3, window=1.0, clock=clock)
    for _ in range(3):
        await limiter.admit()
    clock.advance(1.5)
    assert limiter.pending() == 0
    await limiter.admit()
    assert clock.sleeps == []


async def test_concurrent_admits_never_exceed_limit() -> None:
    """並行呼び出しでもウィンドウあたりの上限を超えないこと。"""
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=10, window=1.0, clock=clock)
    admitted = await asyncio.gather(*(limiter.admit() for _ in range(25)))
    times = sorted(admitted)
    assert times[:10] == [0.0] * 10
    assert times[10:20] == [pytest.approx(1.0)] * 10
    assert times[20:] == [pytest.approx(2.0)] * 5
    for i in range(len(times) - 10):
        assert times[i + 10] - times[i] >= 1.0


def test_invalid_parameters() -> None:
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(max_requests=0)
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(window=0)
