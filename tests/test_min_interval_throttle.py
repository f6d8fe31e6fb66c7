"""Unit tests for the outbound minimum-interval throttle."""

import asyncio
import time

import pytest

from app.adapters.rate_limit.min_interval import MinIntervalThrottle
from tests.conftest import FakeTime


class RecordingSleep:
    """Fake ``asyncio.sleep`` that advances a FakeTime instead of blocking."""

    def __init__(self, clock: FakeTime) -> None:
        self.clock = clock
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        self.clock.advance(delay)


@pytest.mark.asyncio
async def test_first_call_never_waits(fake_time: FakeTime) -> None:
    sleep = RecordingSleep(fake_time)
    throttle = MinIntervalThrottle(1.0, clock=fake_time.time, sleep=sleep)

    assert await throttle.wait() == 0.0
    assert sleep.delays == []
    assert throttle.last_request_at == fake_time.current


@pytest.mark.asyncio
async def test_back_to_back_calls_wait_for_remaining_interval(fake_time: FakeTime) -> None:
    sleep = RecordingSleep(fake_time)
    throttle = MinIntervalThrottle(1.0, clock=fake_time.time, sleep=sleep)

    await throttle.wait()
    fake_time.advance(0.25)
    delay = await throttle.wait()

    assert delay == pytest.approx(0.75)
    assert sleep.delays == [pytest.approx(0.75)]


@pytest.mark.asyncio
async def test_no_wait_once_interval_has_passed(fake_time: FakeTime) -> None:
    sleep = RecordingSleep(fake_time)
    throttle = MinIntervalThrottle(1.0, clock=fake_time.time, sleep=sleep)

    await throttle.wait()
    fake_time.advance(1.5)

    assert await throttle.wait() == 0.0
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_consecutive_calls_are_spaced_by_interval(fake_time: FakeTime) -> None:
    sleep = RecordingSleep(fake_time)
    throttle = MinIntervalThrottle(1.0, clock=fake_time.time, sleep=sleep)

    stamps = []
    for _ in range(4):
        await throttle.wait()
        stamps.append(throttle.last_request_at)

    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert all(gap >= 1.0 for gap in gaps)


@pytest.mark.asyncio
async def test_real_clock_spacing() -> None:
    throttle = MinIntervalThrottle(0.05)

    await throttle.wait()
    start = time.monotonic()
    await throttle.wait()

    assert time.monotonic() - start >= 0.045


def test_negative_interval_rejected() -> None:
    with pytest.raises(ValueError):
        MinIntervalThrottle(-1)


@pytest.mark.asyncio
async def test_concurrent_waiters_are_serialized(fake_time: FakeTime) -> None:
    sleep = RecordingSleep(fake_time)
    throttle = MinIntervalThrottle(1.0, clock=fake_time.time, sleep=sleep)
    stamps: list[float] = []

    async def call() -> None:
        await throttle.wait()
        stamps.append(fake_time.time())

    await asyncio.gather(*(call() for _ in range(4)))

    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert gaps == [pytest.approx(1.0)] * 3
