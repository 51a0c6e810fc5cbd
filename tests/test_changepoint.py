"""
Test cases for windowed change detection: mean shifts between adjacent windows and slope, volatility and level changes between fitted trend windows.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from config import settings
from engine.changepoint import detect_pattern_changes, detect_significant_trend_changes
from engine.changepoint.pattern import minimum_samples as pattern_minimum
from engine.changepoint.trend import minimum_samples as trend_minimum
from engine.exceptions import InsufficientDataError, InvalidConfigurationError
from engine.options import PatternChangeOptions, TrendChangeOptions


def _two_segments():
    rng = np.random.default_rng(42)
    return list(rng.normal(50, 2, 40)) + list(rng.normal(80, 2, 40))


def _tent():
    return [float(i) for i in range(30)] + [float(29 - j) for j in range(1, 31)]


def test_pattern_change_at_segment_boundary(points):
    series = points(_two_segments())
    opts = PatternChangeOptions(window_size=10, sensitivity_threshold=1.5, min_change_percent=10.0)
    changes = detect_pattern_changes(series, opts)
    assert len(changes) == 1
    change = changes[0]
    assert change.timestamp == series[40].timestamp
    assert change.value == pytest.approx(np.mean([p.value for p in series[40:50]]))
    assert change.expected_value == pytest.approx(np.mean([p.value for p in series[30:40]]))
    assert change.deviation > 1.5
    assert change.description.startswith("Pattern change detected")


def test_pattern_sensitivity_monotonic(points):
    series = points(_two_segments())
    counts = [
        len(detect_pattern_changes(series, PatternChangeOptions(window_size=10, sensitivity_threshold=s)))
        for s in (0.1, 1.5, 10.0, 100.0)
    ]
    assert counts == sorted(counts, reverse=True)


def test_pattern_overlapping_step_stays_deduplicated(points):
    series = points(_two_segments())
    changes = detect_pattern_changes(series, PatternChangeOptions(window_size=10, step=1))
    assert len(changes) >= 1
    keys = [(c.timestamp, c.value) for c in changes]
    assert len(keys) == len(set(keys))
    assert [c.timestamp for c in changes] == sorted(c.timestamp for c in changes)


def test_pattern_constant_series_is_empty(points):
    assert detect_pattern_changes(points([7.0] * 40)) == []


def test_pattern_minimum_samples(points, monkeypatch):
    assert pattern_minimum(10) == 20
    assert pattern_minimum(15) == 30
    with pytest.raises(InsufficientDataError) as exc:
        detect_pattern_changes(points(range(19)), PatternChangeOptions(window_size=10))
    assert "20 required" in str(exc.value)
    with pytest.raises(InvalidConfigurationError):
        detect_pattern_changes(points(range(40)), PatternChangeOptions(sensitivity_threshold=0))


def test_trend_reversal_detected(points):
    series = points(_tent())
    changes = detect_significant_trend_changes(series, TrendChangeOptions(window_size=20))
    assert changes
    assert any("trend direction reversal" in c.description for c in changes)
    assert all(c.description.startswith("Significant trend change") for c in changes)
    assert all(c.deviation > 0 for c in changes)
    assert [c.timestamp for c in changes] == sorted(c.timestamp for c in changes)
    at_peak = [c for c in changes if c.timestamp == series[30].timestamp]
    assert at_peak and at_peak[0].expected_value == pytest.approx(30.0)


def test_trend_constant_series_is_empty(points):
    assert detect_significant_trend_changes(points([3.0] * 60), TrendChangeOptions(window_size=20)) == []


def test_trend_minimum_samples(points, monkeypatch):
    assert trend_minimum(20) == 60
    with pytest.raises(InsufficientDataError) as exc:
        detect_significant_trend_changes(points(range(59)), TrendChangeOptions(window_size=20))
    assert "60 required" in str(exc.value)
    monkeypatch.setattr(settings, "trend_window_size", 5)
    assert detect_significant_trend_changes(points([3.0] * 15)) == []


def test_trend_rejects_tiny_window(points):
    with pytest.raises(InvalidConfigurationError):
        detect_significant_trend_changes(points(range(60)), TrendChangeOptions(window_size=1))
