from __future__ import annotations

import logging
import time
from typing import Callable

from heartbeat.collectors.base import MetricsSource
from heartbeat.engine.detector import AnomalyDetector
from heartbeat.engine.history import DEFAULT_CAPACITY, HistoryWindow
from heartbeat.models.baseline import BaselineConfig
from heartbeat.models.readings import DiskReading, ProcessReading
from heartbeat.models.severity import SeverityThresholds, overall_severity
from heartbeat.models.snapshot import CoreMetrics, DiskMetrics, ProcessMetrics, Snapshot

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1_048_576
BYTES_PER_GB = 1_073_741_824


def percent(part: float, whole: float) -> float:
    """``part / whole * 100``, or 0.0 when ``whole`` is zero."""
    if whole == 0:
        return 0.0
    return part / whole * 100.0


def disk_metrics(disk: DiskReading) -> DiskMetrics:
    used = max(0, disk.total_space - disk.available_space)
    return DiskMetrics(
        name=disk.name,
        mount_point=disk.mount_point,
        file_system=disk.file_system,
        kind=disk.kind,
        is_removable=disk.is_removable,
        total_space_gb=round(disk.total_space / BYTES_PER_GB, 2),
        available_space_gb=round(disk.available_space / BYTES_PER_GB, 2),
        used_space_gb=round(used / BYTES_PER_GB, 2),
        usage_percent=percent(used, disk.total_space),
    )


def top_processes(processes: list[ProcessReading], limit: int) -> list[ProcessMetrics]:
    """Highest-CPU processes first; ties keep their reported order."""
    ranked = sorted(processes, key=lambda p: p.cpu_usage, reverse=True)
    return [
        ProcessMetrics(
            pid=p.pid,
            name=p.name,
            cpu_usage=p.cpu_usage,
            memory_mb=p.memory_bytes // BYTES_PER_MB,
            disk_read_bytes=p.disk_read_bytes,
            disk_write_bytes=p.disk_write_bytes,
        )
        for p in ranked[:limit]
    ]


class SnapshotAggregator:
    """Builds one Snapshot per tick and maintains the CPU and memory baselines.

    OS and CPU identity are read from the source once, at construction.
    Detection always runs against the windows as they stood before this tick;
    the new samples are pushed only after the verdicts are recorded.
    """

    def __init__(
        self,
        source: MetricsSource,
        baseline: BaselineConfig | None = None,
        history_capacity: int = DEFAULT_CAPACITY,
        top_process_count: int = 10,
        thresholds: SeverityThresholds | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.detector = AnomalyDetector(baseline)
        self.cpu_history = HistoryWindow(history_capacity)
        self.memory_history = HistoryWindow(history_capacity)
        self.top_process_count = top_process_count
        self.thresholds = thresholds or SeverityThresholds()
        self._clock = clock
        self.os_info = source.os_info()
        self.cpu_info = source.cpu_info()
        logger.info(
            "Monitoring %s (%s) on %s, %s cores",
            self.os_info.hostname,
            self.os_info.long_os_version,
            self.cpu_info.brand,
            self.cpu_info.physical_core_count or "?",
        )

    def aggregate(self, source: MetricsSource) -> Snapshot:
        source.refresh()

        cpu_usage = source.cpu_usage()
        memory = source.memory()
        swap = source.swap()
        memory_used_mb = memory.used // BYTES_PER_MB
        memory_total_mb = memory.total // BYTES_PER_MB
        memory_usage_percent = percent(memory_used_mb, memory_total_mb)
        processes = source.processes()

        cpu_spike = self.detector.cpu_spike(cpu_usage, self.cpu_history)
        memory_leak = self.detector.memory_leak(memory_used_mb, self.memory_history)

        snapshot = Snapshot(
            timestamp=int(self._clock()),
            cpu_usage_percent=cpu_usage,
            cpu_cores=[
                CoreMetrics(core_id=i, usage_percent=usage)
                for i, usage in enumerate(source.per_core_usage())
            ],
            memory_total_mb=memory_total_mb,
            memory_used_mb=memory_used_mb,
            memory_free_mb=memory.free // BYTES_PER_MB,
            memory_available_mb=memory.available // BYTES_PER_MB,
            memory_usage_percent=memory_usage_percent,
            swap_total_mb=swap.total // BYTES_PER_MB,
            swap_used_mb=swap.used // BYTES_PER_MB,
            cpu_spike_detected=cpu_spike,
            memory_leak_suspected=memory_leak,
            status=overall_severity(cpu_usage, memory_usage_percent, self.thresholds),
            os_info=self.os_info,
            cpu_info=self.cpu_info,
            disks=[disk_metrics(d) for d in source.disks()],
            network_interfaces=source.network_interfaces(),
            process_count=len(processes),
            top_processes=top_processes(processes, self.top_process_count),
            load_average=source.load_average(),
            uptime_seconds=source.uptime(),
            boot_time=source.boot_time(),
        )

        self.cpu_history.push(cpu_usage)
        self.memory_history.push(memory_used_mb)
        return snapshot
