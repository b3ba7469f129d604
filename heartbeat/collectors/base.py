from __future__ import annotations

from abc import ABC, abstractmethod

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


class MetricsSource(ABC):
    """Abstract provider of raw host metrics.

    ``refresh()`` takes a new reading of every counter; the accessors return
    the values captured by the most recent refresh and do no computation of
    their own. Sources must tolerate being refreshed every second for the
    lifetime of the process.
    """

    name: str = "base"

    # ── refresh ─────────────────────────────────────────

    @abstractmethod
    def refresh(self) -> None:
        """Re-read all counters from the host."""
        ...

    # ── per-tick values ─────────────────────────────────

    @abstractmethod
    def cpu_usage(self) -> float: ...

    @abstractmethod
    def per_core_usage(self) -> list[float]: ...

    @abstractmethod
    def memory(self) -> MemoryReading: ...

    @abstractmethod
    def swap(self) -> SwapReading: ...

    @abstractmethod
    def disks(self) -> list[DiskReading]: ...

    @abstractmethod
    def network_interfaces(self) -> list[NetworkInterfaceMetrics]: ...

    @abstractmethod
    def processes(self) -> list[ProcessReading]: ...

    @abstractmethod
    def load_average(self) -> LoadAverage: ...

    @abstractmethod
    def boot_time(self) -> int: ...

    @abstractmethod
    def uptime(self) -> int: ...

    # ── static identity ─────────────────────────────────

    @abstractmethod
    def os_info(self) -> OsInfo: ...

    @abstractmethod
    def cpu_info(self) -> CpuInfo: ...
