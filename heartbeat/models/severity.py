from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Severity(StrEnum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


SEVERITY_RANK: dict[Severity, int] = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
}


class SeverityThresholds(BaseModel):
    """Usage percentages above which CPU and memory are flagged."""

    cpu_warning: float = 60.0
    cpu_critical: float = 80.0
    memory_warning: float = 70.0
    memory_critical: float = 85.0

    model_config = {"frozen": True}


def cpu_severity(percent: float, thresholds: SeverityThresholds) -> Severity:
    if percent > thresholds.cpu_critical:
        return Severity.CRITICAL
    if percent > thresholds.cpu_warning:
        return Severity.WARNING
    return Severity.OK


def memory_severity(percent: float, thresholds: SeverityThresholds) -> Severity:
    if percent > thresholds.memory_critical:
        return Severity.CRITICAL
    if percent > thresholds.memory_warning:
        return Severity.WARNING
    return Severity.OK


def overall_severity(
    cpu_percent: float,
    memory_percent: float,
    thresholds: SeverityThresholds,
) -> Severity:
    """The worse of the CPU and memory severities."""
    return max(
        cpu_severity(cpu_percent, thresholds),
        memory_severity(memory_percent, thresholds),
        key=SEVERITY_RANK.__getitem__,
    )
