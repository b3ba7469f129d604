"""Tests for heartbeat.engine.detector: rolling-baseline rules."""

from __future__ import annotations

import math
import operator

import pytest

from heartbeat.engine.detector import AnomalyDetector, BaselineRule
from heartbeat.engine.history import HistoryWindow
from heartbeat.models.baseline import BaselineConfig


def _window(samples) -> HistoryWindow:
    w = HistoryWindow()
    for s in samples:
        w.push(s)
    return w


@pytest.fixture
def detector():
    return AnomalyDetector()


# ── warm-up ─────────────────────────────────────────────


class TestWarmUp:
    @pytest.mark.parametrize("count", [0, 1, 5, 9])
    def test_cpu_rule_inactive_below_baseline_samples(self, detector, count):
        assert detector.cpu_spike(1e9, _window([50.0] * count)) is False

    @pytest.mark.parametrize("count", [0, 1, 5, 9])
    def test_memory_rule_inactive_below_baseline_samples(self, detector, count):
        assert detector.memory_leak(1e12, _window([1000] * count)) is False

    def test_custom_baseline_samples(self):
        detector = AnomalyDetector(BaselineConfig(baseline_samples=3))
        assert detector.cpu_spike(50.0, _window([10.0] * 2)) is False
        assert detector.cpu_spike(50.0, _window([10.0] * 3)) is True


# ── CPU spike ───────────────────────────────────────────


class TestCpuSpike:
    def test_spike_above_twice_baseline(self, detector):
        assert detector.cpu_spike(21.0, _window([10.0] * 10)) is True

    def test_no_spike_below_twice_baseline(self, detector):
        assert detector.cpu_spike(19.0, _window([10.0] * 10)) is False

    def test_threshold_is_strict(self, detector):
        assert detector.cpu_spike(20.0, _window([10.0] * 10)) is False

    def test_mean_of_mixed_samples(self, detector):
        assert detector.cpu_spike(21.0, _window([5.0, 15.0] * 5)) is True

    @pytest.mark.parametrize("baseline", [0.0, 1.0, 4.9, 5.0])
    def test_floor_suppresses_idle_baseline(self, detector, baseline):
        assert detector.cpu_spike(100.0, _window([baseline] * 10)) is False
        assert detector.cpu_spike(1e9, _window([baseline] * 10)) is False

    def test_just_above_floor_engages(self, detector):
        assert detector.cpu_spike(100.0, _window([5.1] * 10)) is True

    def test_does_not_touch_window(self, detector):
        w = _window([10.0] * 10)
        detector.cpu_spike(50.0, w)
        assert list(w) == [10.0] * 10


# ── memory leak ─────────────────────────────────────────


class TestMemoryLeak:
    def test_leak_above_growth_factor(self, detector):
        assert detector.memory_leak(1201, _window([1000] * 10)) is True

    def test_no_leak_below_growth_factor(self, detector):
        assert detector.memory_leak(1199, _window([1000] * 10)) is False

    def test_threshold_is_strict(self, detector):
        assert detector.memory_leak(1200, _window([1000] * 10)) is False

    def test_threshold_floored_to_whole_megabytes(self, detector):
        # mean 1000.5 -> threshold 1200.6 -> floored to 1200
        w = _window([1000, 1001] * 5)
        assert detector.memory_leak(1201, w) is True
        assert detector.memory_leak(1200, w) is False

    def test_stable_memory_not_flagged(self, detector):
        assert detector.memory_leak(1000, _window([1000] * 30)) is False


# ── generic rule ────────────────────────────────────────


class TestBaselineRule:
    def test_lower_comparison_detects_drop(self):
        rule = BaselineRule(name="drop", multiplier=0.5, compare=operator.lt)
        w = _window([100.0] * 10)
        assert rule.evaluate(40.0, w, baseline_samples=10) is True
        assert rule.evaluate(60.0, w, baseline_samples=10) is False

    def test_above_baseline_clause(self):
        # multiplier below 1 would flag values under the baseline without the clause
        loose = BaselineRule(name="loose", multiplier=0.5)
        strict = BaselineRule(name="strict", multiplier=0.5, above_baseline=True)
        w = _window([1000] * 10)
        assert loose.evaluate(600, w, baseline_samples=10) is True
        assert strict.evaluate(600, w, baseline_samples=10) is False
        assert strict.evaluate(1001, w, baseline_samples=10) is True

    def test_rounding_applied_to_threshold(self):
        rule = BaselineRule(name="r", multiplier=1.5, rounding=math.ceil)
        w = _window([1.0] * 10)  # threshold 1.5 -> 2
        assert rule.evaluate(1.9, w, baseline_samples=10) is False
        assert rule.evaluate(2.1, w, baseline_samples=10) is True

    def test_rules_follow_config(self):
        cfg = BaselineConfig(spike_multiplier=3.0, leak_growth_factor=1.5, spike_floor=1.0)
        detector = AnomalyDetector(cfg)
        assert detector.cpu_spike_rule.multiplier == 3.0
        assert detector.cpu_spike_rule.floor == 1.0
        assert detector.memory_leak_rule.multiplier == 1.5
        assert detector.cpu_spike(25.0, _window([10.0] * 10)) is False
        assert detector.cpu_spike(31.0, _window([10.0] * 10)) is True
