"""Anomaly scenario simulator for the heartbeat monitor.

Replays scripted CPU and memory sequences through the real aggregator,
detector, scheduler and emitter, so spike and leak detection can be watched
without loading the host.

Usage:
    python -m simulator.simulate                       # run all scenarios
    python -m simulator.simulate --scenario cpu_spike
    python -m simulator.simulate --interval 0.05
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from heartbeat.collectors.base import MetricsSource
from heartbeat.config import settings
from heartbeat.engine import JsonLinesEmitter, Scheduler, SnapshotAggregator
from heartbeat.models.readings import (
    CpuInfo,
    DiskReading,
    LoadAverage,
    MemoryReading,
    NetworkInterfaceMetrics,
    OsInfo,
    ProcessReading,
    SwapReading,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s [SIM] %(message)s", stream=sys.stderr)
logger = logging.getLogger("simulator")

MB = 1_048_576
GB = 1_073_741_824


class SyntheticSource(MetricsSource):
    """Metrics source that steps through a scripted CPU/memory sequence.

    Each ``refresh()`` advances one step; once the script runs out the last
    step repeats.
    """

    name = "synthetic"

    def __init__(
        self,
        cpu: list[float],
        memory_mb: list[int],
        total_memory_mb: int = 16_384,
        cores: int = 4,
        start_time: int = 1_700_000_000,
    ) -> None:
        if len(cpu) != len(memory_mb):
            raise ValueError("cpu and memory scripts must have the same length")
        if not cpu:
            raise ValueError("script must contain at least one step")
        self._cpu = cpu
        self._memory_mb = memory_mb
        self.total_memory_mb = total_memory_mb
        self.cores = cores
        self.start_time = start_time
        self.step = -1

    def __len__(self) -> int:
        return len(self._cpu)

    def refresh(self) -> None:
        self.step = min(self.step + 1, len(self._cpu) - 1)

    def _current(self) -> int:
        return max(self.step, 0)

    def cpu_usage(self) -> float:
        return self._cpu[self._current()]

    def per_core_usage(self) -> list[float]:
        return [self.cpu_usage()] * self.cores

    def memory(self) -> MemoryReading:
        used = self._memory_mb[self._current()] * MB
        total = self.total_memory_mb * MB
        free = max(0, total - used)
        return MemoryReading(total=total, used=used, free=free, available=free)

    def swap(self) -> SwapReading:
        return SwapReading(total=2048 * MB, used=0)

    def disks(self) -> list[DiskReading]:
        return [
            DiskReading(
                name="/dev/sim0",
                mount_point="/",
                file_system="ext4",
                kind="SSD",
                total_space=256 * GB,
                available_space=128 * GB,
            )
        ]

    def network_interfaces(self) -> list[NetworkInterfaceMetrics]:
        n = self._current() + 1
        return [
            NetworkInterfaceMetrics(
                name="sim0",
                bytes_received=n * 1500,
                bytes_transmitted=n * 900,
                packets_received=n,
                packets_transmitted=n,
            )
        ]

    def processes(self) -> list[ProcessReading]:
        return [
            ProcessReading(
                pid=4242,
                name="workload",
                cpu_usage=self.cpu_usage() * self.cores,
                memory_bytes=self._memory_mb[self._current()] * MB // 2,
            ),
            ProcessReading(pid=1, name="init", cpu_usage=0.1, memory_bytes=12 * MB),
        ]

    def load_average(self) -> LoadAverage:
        load = self.cpu_usage() / 100 * self.cores
        return LoadAverage(one=load, five=load, fifteen=load)

    def boot_time(self) -> int:
        return self.start_time

    def uptime(self) -> int:
        return self._current() + 1

    def os_info(self) -> OsInfo:
        return OsInfo(name="Simulated", hostname="heartbeat-sim", distribution_id="sim")

    def cpu_info(self) -> CpuInfo:
        return CpuInfo(brand="Synthetic CPU", vendor_id="sim", physical_core_count=self.cores)


# ── Scenario scripts ─────────────────────────────────


def steady(ticks: int = 30) -> SyntheticSource:
    """Flat load; nothing should be flagged."""
    return SyntheticSource(cpu=[20.0] * ticks, memory_mb=[4000] * ticks)


def cpu_spike(baseline: int = 12) -> SyntheticSource:
    """Ten-percent baseline, a burst to 45%, then back to normal."""
    cpu = [10.0] * baseline + [45.0] * 3 + [10.0] * 5
    return SyntheticSource(cpu=cpu, memory_mb=[4000] * len(cpu))


def memory_leak(baseline: int = 12, growth_mb: int = 150, steps: int = 10) -> SyntheticSource:
    """Stable memory, then steady growth until it clears the leak threshold."""
    memory = [2000] * baseline + [2000 + growth_mb * (i + 1) for i in range(steps)]
    return SyntheticSource(cpu=[15.0] * len(memory), memory_mb=memory)


def idle_burst(baseline: int = 12) -> SyntheticSource:
    """Near-idle baseline followed by a burst.

    The floor suppresses the first burst tick. Once absorbed, the burst lifts
    the window mean above the floor and the later burst ticks are flagged.
    """
    cpu = [1.0] * baseline + [90.0] * 3
    return SyntheticSource(cpu=cpu, memory_mb=[3000] * len(cpu))


SCENARIOS = {
    "steady": steady,
    "cpu_spike": cpu_spike,
    "memory_leak": memory_leak,
    "idle_burst": idle_burst,
}


# ── Main runner ──────────────────────────────────────


async def run_scenario(
    source: SyntheticSource,
    interval: float = 0.1,
    emitter: JsonLinesEmitter | None = None,
) -> JsonLinesEmitter:
    """Play one script to the end through a fresh aggregator."""
    aggregator = SnapshotAggregator(
        source,
        baseline=settings.baseline_config(),
        history_capacity=settings.history_capacity,
        top_process_count=settings.top_process_count,
        thresholds=settings.severity_thresholds(),
        clock=lambda: source.start_time + source.uptime(),
    )
    emitter = emitter or JsonLinesEmitter()

    async def on_tick() -> None:
        emitter.emit(aggregator.aggregate(source))

    scheduler = Scheduler(on_tick, interval=interval, max_ticks=len(source))
    await scheduler.run()
    return emitter


async def run_all(interval: float) -> None:
    for name, factory in SCENARIOS.items():
        logger.info("=== Starting scenario: %s ===", name)
        await run_scenario(factory(), interval=interval)
    logger.info("=== All scenarios complete ===")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Heartbeat anomaly simulator")
    parser.add_argument("--scenario", choices=list(SCENARIOS.keys()), help="Run a single scenario")
    parser.add_argument("--interval", type=float, default=0.1, help="Seconds between ticks")
    args = parser.parse_args()

    if args.scenario:
        logger.info("Running scenario: %s", args.scenario)
        await run_scenario(SCENARIOS[args.scenario](), interval=args.interval)
    else:
        await run_all(args.interval)


if __name__ == "__main__":
    asyncio.run(main())
