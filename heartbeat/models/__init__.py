from .baseline import BaselineConfig
from .readings import (
    CpuInfo,
    DiskReading,
    LoadAverage,
    MemoryReading,
    NetworkInterfaceMetrics,
    OsInfo,
    ProcessReading,
    SwapReading,
)
from .severity import Severity, SeverityThresholds, overall_severity
from .snapshot import CoreMetrics, DiskMetrics, ProcessMetrics, Snapshot

__all__ = [
    "BaselineConfig",
    "CoreMetrics",
    "CpuInfo",
    "DiskMetrics",
    "DiskReading",
    "LoadAverage",
    "MemoryReading",
    "NetworkInterfaceMetrics",
    "OsInfo",
    "ProcessMetrics",
    "ProcessReading",
    "Severity",
    "SeverityThresholds",
    "Snapshot",
    "SwapReading",
    "overall_severity",
]
