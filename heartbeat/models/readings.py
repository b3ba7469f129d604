from __future__ import annotations

from pydantic import BaseModel

UNKNOWN = "Unknown"


class MemoryReading(BaseModel):
    """Physical memory counters in bytes."""

    total: int = 0
    used: int = 0
    free: int = 0
    available: int = 0

    model_config = {"frozen": True}


class SwapReading(BaseModel):
    total: int = 0
    used: int = 0

    model_config = {"frozen": True}


class DiskReading(BaseModel):
    """Raw space counters for one mounted filesystem, in bytes."""

    name: str
    mount_point: str
    file_system: str = UNKNOWN
    kind: str = UNKNOWN
    is_removable: bool = False
    total_space: int = 0
    available_space: int = 0

    model_config = {"frozen": True}


class ProcessReading(BaseModel):
    pid: int
    name: str = ""
    cpu_usage: float = 0.0
    memory_bytes: int = 0
    disk_read_bytes: int = 0
    disk_write_bytes: int = 0

    model_config = {"frozen": True}


class NetworkInterfaceMetrics(BaseModel):
    """Cumulative counters for one network interface since boot."""

    name: str
    bytes_received: int = 0
    bytes_transmitted: int = 0
    packets_received: int = 0
    packets_transmitted: int = 0
    errors_received: int = 0
    errors_transmitted: int = 0

    model_config = {"frozen": True}


class LoadAverage(BaseModel):
    one: float = 0.0
    five: float = 0.0
    fifteen: float = 0.0

    model_config = {"frozen": True}


class OsInfo(BaseModel):
    """Operating system identity, captured once at startup."""

    name: str = UNKNOWN
    kernel_version: str = UNKNOWN
    os_version: str = UNKNOWN
    long_os_version: str = UNKNOWN
    hostname: str = UNKNOWN
    distribution_id: str = UNKNOWN

    model_config = {"frozen": True}


class CpuInfo(BaseModel):
    """Processor identity, captured once at startup."""

    brand: str = UNKNOWN
    vendor_id: str = UNKNOWN
    frequency_mhz: int = 0
    physical_core_count: int | None = None

    model_config = {"frozen": True}
