"""Tests for per-host pacing."""

import asyncio
import random

import pytest

from channel_screen.utils.rate_limiter import HostPacer, HostRule


class FakeClock:
    """Monotonic clock advanced only by the fake sleep."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.asyncio
async def test_first_request_is_not_delayed(clock):
    pacer = HostPacer(min_interval_ms=1500, jitter_ms=0, clock=clock, sleep=clock.sleep)

    waited = await pacer.acquire("www.youtube.com")

    assert waited == 0
    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_consecutive_requests_keep_min_gap(clock):
    pacer = HostPacer(min_interval_ms=1000, jitter_ms=0, clock=clock, sleep=clock.sleep)
    dispatched = []

    for _ in range(4):
        await pacer.acquire("www.youtube.com")
        dispatched.append(clock.now)

    gaps = [b - a for a, b in zip(dispatched, dispatched[1:])]
    assert all(gap >= 1.0 for gap in gaps)


@pytest.mark.asyncio
async def test_elapsed_time_counts_towards_interval(clock):
    pacer = HostPacer(min_interval_ms=1500, jitter_ms=0, clock=clock, sleep=clock.sleep)

    await pacer.acquire("www.youtube.com")
    clock.now += 1.0
    waited = await pacer.acquire("www.youtube.com")

    assert waited == pytest.approx(0.5)


@pytest.mark.asyncio
async def test_hosts_are_independent(clock):
    pacer = HostPacer(min_interval_ms=1500, jitter_ms=0, clock=clock, sleep=clock.sleep)

    await pacer.acquire("www.youtube.com")
    waited = await pacer.acquire("example.org")

    assert waited == 0


@pytest.mark.asyncio
async def test_concurrent_reservations_queue_up(clock):
    pacer = HostPacer(min_interval_ms=1500, jitter_ms=0, clock=clock, sleep=clock.sleep)

    waits = await asyncio.gather(*(pacer.reserve("www.youtube.com") for _ in range(3)))

    assert sorted(waits) == pytest.approx([0.0, 1.5, 3.0])
    assert pacer.last_request_at("www.youtube.com") == pytest.approx(3.0)


@pytest.mark.asyncio
async def test_jitter_is_bounded(clock):
    pacer = HostPacer(
        min_interval_ms=1000,
        jitter_ms=500,
        rng=random.Random(42),
        clock=clock,
        sleep=clock.sleep,
    )

    first = await pacer.reserve("www.youtube.com")
    second = await pacer.reserve("www.youtube.com")

    assert 0.0 <= first <= 0.5
    # Second slot: remaining interval after the first slot, plus fresh jitter
    assert first + 1.0 <= second <= first + 1.5


@pytest.mark.asyncio
async def test_host_rule_by_apex_domain(clock):
    pacer = HostPacer(
        min_interval_ms=100,
        jitter_ms=0,
        host_rules={"youtube.com": HostRule(min_interval_ms=3000)},
        clock=clock,
        sleep=clock.sleep,
    )

    assert pacer.rule_for("www.youtube.com").min_interval_ms == 3000
    assert pacer.rule_for("example.org").min_interval_ms == 100

    await pacer.acquire("www.youtube.com")
    waited = await pacer.acquire("www.youtube.com")
    assert waited == pytest.approx(3.0)


def test_exact_host_rule_wins():
    pacer = HostPacer(
        host_rules={
            "youtube.com": HostRule(min_interval_ms=3000),
            "M.YouTube.com": HostRule(min_interval_ms=500, jitter_ms=10),
        },
    )

    assert pacer.rule_for("m.youtube.com") == HostRule(min_interval_ms=500, jitter_ms=10)


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        HostPacer(min_interval_ms=-1)


@pytest.mark.asyncio
async def test_reset_forgets_hosts(clock):
    pacer = HostPacer(min_interval_ms=1500, jitter_ms=0, clock=clock, sleep=clock.sleep)

    await pacer.acquire("www.youtube.com")
    pacer.reset()

    assert pacer.last_request_at("www.youtube.com") is None
    assert await pacer.acquire("www.youtube.com") == 0


def test_state_survives_separate_event_loops(clock):
    pacer = HostPacer(min_interval_ms=1500, jitter_ms=0, clock=clock, sleep=clock.sleep)

    assert asyncio.run(pacer.acquire("www.youtube.com")) == 0
    assert asyncio.run(pacer.acquire("www.youtube.com")) == pytest.approx(1.5)
