from __future__ import annotations

from pydantic import BaseModel, Field

from heartbeat.models.readings import CpuInfo, LoadAverage, NetworkInterfaceMetrics, OsInfo
from heartbeat.models.severity import Severity


class CoreMetrics(BaseModel):
    core_id: int
    usage_percent: float

    model_config = {"frozen": True}


class DiskMetrics(BaseModel):
    """Per-mount space usage, sizes in gigabytes."""

    name: str
    mount_point: str
    file_system: str
    kind: str
    is_removable: bool = False
    total_space_gb: float = 0.0
    available_space_gb: float = 0.0
    used_space_gb: float = 0.0
    usage_percent: float = 0.0

    model_config = {"frozen": True}


class ProcessMetrics(BaseModel):
    pid: int
    name: str
    cpu_usage: float = 0.0
    memory_mb: int = 0
    disk_read_bytes: int = 0
    disk_write_bytes: int = 0

    model_config = {"frozen": True}


class Snapshot(BaseModel):
    """Point-in-time record of host metrics and anomaly verdicts for one tick."""

    timestamp: int = Field(ge=0)

    cpu_usage_percent: float = 0.0
    cpu_cores: tuple[CoreMetrics, ...] = ()

    memory_total_mb: int = Field(default=0, ge=0)
    memory_used_mb: int = Field(default=0, ge=0)
    memory_free_mb: int = Field(default=0, ge=0)
    memory_available_mb: int = Field(default=0, ge=0)
    memory_usage_percent: float = 0.0
    swap_total_mb: int = Field(default=0, ge=0)
    swap_used_mb: int = Field(default=0, ge=0)

    cpu_spike_detected: bool = False
    memory_leak_suspected: bool = False
    status: Severity = Severity.OK

    os_info: OsInfo = Field(default_factory=OsInfo)
    cpu_info: CpuInfo = Field(default_factory=CpuInfo)
    disks: tuple[DiskMetrics, ...] = ()
    network_interfaces: tuple[NetworkInterfaceMetrics, ...] = ()
    process_count: int = Field(default=0, ge=0)
    top_processes: tuple[ProcessMetrics, ...] = ()
    load_average: LoadAverage = Field(default_factory=LoadAverage)
    uptime_seconds: int = Field(default=0, ge=0)
    boot_time: int = Field(default=0, ge=0)

    model_config = {"frozen": True}
