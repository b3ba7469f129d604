from __future__ import annotations

import logging
import platform
import socket
import time
from pathlib import Path

import psutil

from heartbeat.collectors.base import MetricsSource
from heartbeat.models.readings import (
    UNKNOWN,
    CpuInfo,
    DiskReading,
    LoadAverage,
    MemoryReading,
    NetworkInterfaceMetrics,
    OsInfo,
    ProcessReading,
    SwapReading,
)

logger = logging.getLogger(__name__)

_SYS_BLOCK = Path("/sys/class/block")
_PROC_CPUINFO = Path("/proc/cpuinfo")


class PsutilSource(MetricsSource):
    """Reads host counters through psutil and caches them until the next refresh."""

    name = "psutil"

    def __init__(self) -> None:
        self._cpu_usage = 0.0
        self._per_core: list[float] = []
        self._memory = MemoryReading()
        self._swap = SwapReading()
        self._disks: list[DiskReading] = []
        self._interfaces: list[NetworkInterfaceMetrics] = []
        self._processes: list[ProcessReading] = []
        self._load = LoadAverage()
        self._boot_time = 0
        self._uptime = 0

    # ── refresh ─────────────────────────────────────────

    def refresh(self) -> None:
        self._cpu_usage = float(psutil.cpu_percent(interval=None))
        self._per_core = [float(p) for p in psutil.cpu_percent(interval=None, percpu=True)]

        vm = psutil.virtual_memory()
        self._memory = MemoryReading(
            total=vm.total, used=vm.used, free=vm.free, available=vm.available
        )
        sm = psutil.swap_memory()
        self._swap = SwapReading(total=sm.total, used=sm.used)

        self._disks = self._read_disks()
        self._interfaces = self._read_interfaces()
        self._processes = self._read_processes()

        one, five, fifteen = psutil.getloadavg()
        self._load = LoadAverage(one=one, five=five, fifteen=fifteen)
        self._boot_time = int(psutil.boot_time())
        self._uptime = max(0, int(time.time()) - self._boot_time)

    # ── accessors ───────────────────────────────────────

    def cpu_usage(self) -> float:
        return self._cpu_usage

    def per_core_usage(self) -> list[float]:
        return list(self._per_core)

    def memory(self) -> MemoryReading:
        return self._memory

    def swap(self) -> SwapReading:
        return self._swap

    def disks(self) -> list[DiskReading]:
        return list(self._disks)

    def network_interfaces(self) -> list[NetworkInterfaceMetrics]:
        return list(self._interfaces)

    def processes(self) -> list[ProcessReading]:
        return list(self._processes)

    def load_average(self) -> LoadAverage:
        return self._load

    def boot_time(self) -> int:
        return self._boot_time

    def uptime(self) -> int:
        return self._uptime

    def os_info(self) -> OsInfo:
        system = platform.system() or UNKNOWN
        release = platform.release() or UNKNOWN
        os_release = self._os_release()
        name = os_release.get("NAME") or system
        version = os_release.get("VERSION_ID") or platform.version() or UNKNOWN
        return OsInfo(
            name=name,
            kernel_version=release,
            os_version=version,
            long_os_version=os_release.get("PRETTY_NAME") or f"{system} {version}",
            hostname=socket.gethostname() or platform.node() or UNKNOWN,
            distribution_id=os_release.get("ID") or platform.system().lower() or UNKNOWN,
        )

    def cpu_info(self) -> CpuInfo:
        cpuinfo = self._read_cpuinfo()
        try:
            freq = psutil.cpu_freq()
        except (OSError, NotImplementedError):
            freq = None
        return CpuInfo(
            brand=cpuinfo.get("model name") or platform.processor() or UNKNOWN,
            vendor_id=cpuinfo.get("vendor_id") or UNKNOWN,
            frequency_mhz=int(freq.current) if freq else 0,
            physical_core_count=psutil.cpu_count(logical=False),
        )

    # ── internals ───────────────────────────────────────

    def _read_disks(self) -> list[DiskReading]:
        readings: list[DiskReading] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                logger.debug("Cannot stat mount point: %s", part.mountpoint)
                continue
            readings.append(
                DiskReading(
                    name=part.device,
                    mount_point=part.mountpoint,
                    file_system=part.fstype or UNKNOWN,
                    kind=self._disk_kind(part.device),
                    is_removable=self._is_removable(part.device, part.opts),
                    total_space=usage.total,
                    available_space=usage.free,
                )
            )
        return readings

    @staticmethod
    def _read_interfaces() -> list[NetworkInterfaceMetrics]:
        counters = psutil.net_io_counters(pernic=True)
        return [
            NetworkInterfaceMetrics(
                name=nic,
                bytes_received=c.bytes_recv,
                bytes_transmitted=c.bytes_sent,
                packets_received=c.packets_recv,
                packets_transmitted=c.packets_sent,
                errors_received=c.errin,
                errors_transmitted=c.errout,
            )
            for nic, c in sorted(counters.items())
        ]

    @staticmethod
    def _read_processes() -> list[ProcessReading]:
        attrs = ["pid", "name", "cpu_percent", "memory_info"]
        if hasattr(psutil.Process, "io_counters"):
            attrs.append("io_counters")

        readings: list[ProcessReading] = []
        for proc in psutil.process_iter(attrs, ad_value=None):
            try:
                info = proc.info
                mem = info.get("memory_info")
                io = info.get("io_counters")
                readings.append(
                    ProcessReading(
                        pid=info["pid"],
                        name=info.get("name") or "",
                        cpu_usage=float(info.get("cpu_percent") or 0.0),
                        memory_bytes=mem.rss if mem else 0,
                        disk_read_bytes=io.read_bytes if io else 0,
                        disk_write_bytes=io.write_bytes if io else 0,
                    )
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue
        return readings

    @classmethod
    def _disk_kind(cls, device: str) -> str:
        rotational = cls._block_attr(device, "queue/rotational")
        if rotational is None:
            return UNKNOWN
        return "HDD" if rotational == "1" else "SSD"

    @classmethod
    def _is_removable(cls, device: str, opts: str) -> bool:
        if "removable" in opts.split(","):
            return True
        return cls._block_attr(device, "removable") == "1"

    @staticmethod
    def _block_attr(device: str, attr: str) -> str | None:
        """Read a sysfs attribute for a partition or its parent block device."""
        block = _SYS_BLOCK / Path(device).name
        for candidate in (block, block.resolve().parent):
            try:
                return (candidate / attr).read_text().strip()
            except OSError:
                continue
        return None

    @staticmethod
    def _os_release() -> dict[str, str]:
        try:
            return platform.freedesktop_os_release()
        except OSError:
            return {}

    @staticmethod
    def _read_cpuinfo() -> dict[str, str]:
        try:
            text = _PROC_CPUINFO.read_text(errors="replace")
        except OSError:
            return {}
        fields: dict[str, str] = {}
        for line in text.splitlines():
            key, sep, value = line.partition(":")
            if sep:
                fields.setdefault(key.strip(), value.strip())
        return fields
