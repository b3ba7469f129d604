from __future__ import annotations

import asyncio

import pytest

from heartbeat.engine.scheduler import Scheduler


class CountingHandler:
    """Tick handler that records how many times it ran."""

    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> None:
        self.calls += 1


# ── basic lifecycle ─────────────────────────────────────


@pytest.mark.asyncio
async def test_scheduler_ticks_repeatedly():
    handler = CountingHandler()
    scheduler = Scheduler(handler, interval=0.05)

    await scheduler.start()
    await asyncio.sleep(0.22)  # should get ~4 ticks
    await scheduler.stop()

    assert handler.calls >= 2
    assert scheduler.ticks == handler.calls


@pytest.mark.asyncio
async def test_scheduler_start_stop_idempotent():
    scheduler = Scheduler(CountingHandler(), interval=0.05)

    await scheduler.start()
    await scheduler.start()  # double start
    assert scheduler.running is True

    await scheduler.stop()
    await scheduler.stop()  # double stop
    assert scheduler.running is False


@pytest.mark.asyncio
async def test_run_stops_after_max_ticks():
    handler = CountingHandler()
    scheduler = Scheduler(handler, interval=0.01, max_ticks=5)

    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    assert handler.calls == 5
    assert scheduler.running is False


@pytest.mark.asyncio
async def test_custom_interval_override():
    scheduler = Scheduler(CountingHandler(), interval=99.0)
    assert scheduler.interval == 99.0


# ── warm-up ─────────────────────────────────────────────


@pytest.mark.asyncio
async def test_prime_runs_once_before_first_tick():
    order: list[str] = []

    async def handler() -> None:
        order.append("tick")

    scheduler = Scheduler(
        handler,
        interval=0.01,
        warmup_delay=0.01,
        prime=lambda: order.append("prime"),
        max_ticks=3,
    )
    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    assert order == ["prime", "tick", "tick", "tick"]


@pytest.mark.asyncio
async def test_first_tick_waits_for_warmup():
    loop = asyncio.get_running_loop()
    stamps: list[float] = []

    async def handler() -> None:
        stamps.append(loop.time())

    scheduler = Scheduler(handler, interval=10.0, warmup_delay=0.1, max_ticks=1)
    started = loop.time()
    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    assert len(stamps) == 1
    # fires right after the warm-up, not after a full interval
    assert 0.09 <= stamps[0] - started < 1.0


@pytest.mark.asyncio
async def test_failing_prime_does_not_stop_loop():
    def prime() -> None:
        raise RuntimeError("refresh failed")

    handler = CountingHandler()
    scheduler = Scheduler(handler, interval=0.01, prime=prime, max_ticks=2)
    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    assert handler.calls == 2


# ── error resilience ────────────────────────────────────


@pytest.mark.asyncio
async def test_scheduler_survives_handler_error(caplog):
    calls = 0

    async def handler() -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("tick failed")

    scheduler = Scheduler(handler, interval=0.01, max_ticks=3)
    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    assert calls == 3
    assert "error during tick 0" in caplog.text


@pytest.mark.asyncio
async def test_ticks_never_overlap():
    active = 0
    peak = 0

    async def slow_handler() -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.03)  # longer than the interval
        active -= 1

    scheduler = Scheduler(slow_handler, interval=0.01, max_ticks=4)
    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    assert scheduler.ticks == 4
    assert peak == 1


@pytest.mark.asyncio
async def test_overrun_fires_once_then_realigns():
    loop = asyncio.get_running_loop()
    stamps: list[float] = []

    async def handler() -> None:
        stamps.append(loop.time())
        if len(stamps) == 1:
            await asyncio.sleep(0.25)  # overruns two intervals

    scheduler = Scheduler(handler, interval=0.1, max_ticks=3)
    await asyncio.wait_for(scheduler.run(), timeout=2.0)

    first_gap = stamps[1] - stamps[0]
    second_gap = stamps[2] - stamps[1]
    # second tick fires as soon as the slow one returns, with no catch-up burst
    assert 0.24 <= first_gap < 0.34
    assert 0.09 <= second_gap < 0.19


@pytest.mark.asyncio
async def test_stop_cancels_pending_wait():
    handler = CountingHandler()
    scheduler = Scheduler(handler, interval=60.0)

    await scheduler.start()
    await asyncio.sleep(0.05)
    await asyncio.wait_for(scheduler.stop(), timeout=1.0)

    assert handler.calls == 1
    assert scheduler.running is False
