from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Callable

from heartbeat.engine.history import HistoryWindow
from heartbeat.models.baseline import BaselineConfig

Comparison = Callable[[float, float], bool]


@dataclass(frozen=True)
class BaselineRule:
    """Flags a sample that crosses ``multiplier`` times the window mean.

    The rule stays silent until the window holds ``baseline_samples`` samples.
    ``floor`` requires the baseline itself to exceed a minimum, ``rounding``
    is applied to the threshold before comparison, and ``above_baseline``
    additionally requires the sample to exceed the raw baseline.
    """

    name: str
    multiplier: float
    compare: Comparison = operator.gt
    floor: float | None = None
    rounding: Callable[[float], float] | None = None
    above_baseline: bool = False

    def evaluate(self, current: float, window: HistoryWindow, baseline_samples: int) -> bool:
        # ``current`` must not already be in ``window``
        if len(window) < baseline_samples:
            return False

        avg = window.mean()
        if self.floor is not None and not avg > self.floor:
            return False

        threshold = avg * self.multiplier
        if self.rounding is not None:
            threshold = self.rounding(threshold)

        if not self.compare(current, threshold):
            return False
        return not self.above_baseline or current > avg


class AnomalyDetector:
    """CPU-spike and memory-leak rules over rolling baselines."""

    def __init__(self, config: BaselineConfig | None = None) -> None:
        self.config = config or BaselineConfig()
        self.cpu_spike_rule = BaselineRule(
            name="cpu_spike",
            multiplier=self.config.spike_multiplier,
            floor=self.config.spike_floor,
        )
        # Threshold is floored to whole megabytes; the mean keeps full precision.
        self.memory_leak_rule = BaselineRule(
            name="memory_leak",
            multiplier=self.config.leak_growth_factor,
            rounding=math.floor,
            above_baseline=True,
        )

    def cpu_spike(self, current_cpu: float, history: HistoryWindow) -> bool:
        return self.cpu_spike_rule.evaluate(
            current_cpu, history, self.config.baseline_samples
        )

    def memory_leak(self, current_memory_mb: float, history: HistoryWindow) -> bool:
        return self.memory_leak_rule.evaluate(
            current_memory_mb, history, self.config.baseline_samples
        )
