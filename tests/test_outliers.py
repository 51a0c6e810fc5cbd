"""
Test cases for the single-series outlier detectors: z-score, modified z-score, Grubbs, Dixon and IQR fencing, plus the statistical deviation entry point built on them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from config import settings
from engine.anomaly import detect_anomalies
from engine.enums import Severity
from engine.exceptions import InsufficientDataError, InvalidConfigurationError
from engine.outliers import dixon, grubbs, iqr, modified_zscore, zscore
from engine.outliers.dixon import critical_q
from engine.outliers.grubbs import critical_value
from engine.statistics.summary import summarize


def _spiked_wave():
    vals = [55.0 + 15.0 * math.sin(0.7 * i) for i in range(100)]
    vals[50] = 55.0 + 8 * 15.0
    return vals


def _summary(series):
    return summarize([p.value for p in series])


def test_detect_anomalies_single_spike(points):
    series = points(_spiked_wave())
    anomalies = detect_anomalies(series, 2.0)
    assert len(anomalies) == 1
    assert anomalies[0].timestamp == series[50].timestamp
    assert anomalies[0].severity == Severity.high
    assert anomalies[0].deviation > 2.0
    assert anomalies[0].description.startswith("Value deviates")


def test_detect_anomalies_constant_series(points):
    assert detect_anomalies(points([42.0] * 30), 2.0) == []


def test_detect_anomalies_validates(points):
    with pytest.raises(InvalidConfigurationError):
        detect_anomalies(points([1, 2, 3]), 0)
    with pytest.raises(InsufficientDataError) as exc:
        detect_anomalies(points([1, 2]))
    assert "3 required" in str(exc.value)


def test_detect_anomalies_default_threshold(points, monkeypatch):
    series = points(_spiked_wave())
    monkeypatch.setattr(settings, "zscore_threshold", 100.0)
    assert detect_anomalies(series) == []


def test_zscore_threshold_monotonic(points):
    series = points(_spiked_wave())
    s = _summary(series)
    counts = [len(zscore(series, s, t)) for t in (0.5, 1.0, 2.0, 3.0)]
    assert counts == sorted(counts, reverse=True)
    for a in zscore(series, s, 1.0):
        assert a.deviation > 1.0


def test_modified_zscore_flags_outlier(points):
    series = points([10, 10, 11, 9, 10, 12, 8, 10, 50])
    anomalies = modified_zscore(series, _summary(series), 3.5)
    assert [a.value for a in anomalies] == [50.0]
    assert anomalies[0].expected_value == pytest.approx(10.0)
    assert anomalies[0].deviation == pytest.approx(0.6745 * 40)


def test_modified_zscore_zero_mad_is_empty(points):
    series = points([5, 5, 5, 5, 9])
    assert modified_zscore(series, _summary(series), 3.5) == []


def test_grubbs_critical_value():
    assert critical_value(10, 0.05) == pytest.approx(2.29, abs=0.02)
    assert critical_value(2, 0.05) == math.inf
    assert critical_value(20, 0.01) > critical_value(20, 0.05)


def test_grubbs_flags_single_outlier(points):
    series = points([10, 11, 9, 10, 11, 9, 10, 10, 11, 9, 50])
    anomalies = grubbs(series, _summary(series), 0.05)
    assert len(anomalies) == 1
    assert anomalies[0].value == 50.0
    assert anomalies[0].deviation > critical_value(len(series), 0.05)
    assert anomalies[0].severity in (Severity.medium, Severity.high)
    assert anomalies[0].description.startswith("Grubbs test anomaly")


def test_grubbs_alpha_monotonic(points):
    series = points([10, 11, 9, 10, 11, 9, 10, 10, 11, 9, 14])
    s = _summary(series)
    counts = [len(grubbs(series, s, a)) for a in (0.2, 0.05, 0.01, 0.001)]
    assert counts == sorted(counts, reverse=True)


def test_grubbs_needs_minimum_samples(points):
    series = points([1, 1, 1, 1, 1, 100])
    assert grubbs(series, _summary(series), 0.05) == []


def test_dixon_flags_high_outlier(points):
    series = points([1, 2, 3, 4, 100])
    anomalies = dixon(series, _summary(series), 0.95)
    assert len(anomalies) == 1
    assert anomalies[0].value == 100.0
    assert anomalies[0].deviation == pytest.approx(96 / 99)
    assert anomalies[0].severity == Severity.high


def test_dixon_limits(points):
    assert critical_q(5, 0.95) == pytest.approx(0.710)
    assert critical_q(31, 0.95) is None
    wide = points(list(range(40)) + [1000])
    assert dixon(wide, _summary(wide), 0.95) == []
    flat = points([3, 3, 3, 3])
    assert dixon(flat, _summary(flat), 0.95) == []


def test_iqr_fences(points):
    series = points(list(range(1, 21)) + [100])
    anomalies = iqr(series, 1.5)
    assert len(anomalies) == 1
    a = anomalies[0]
    assert a.value == 100.0
    assert a.expected_value == pytest.approx(31.0)
    assert a.deviation == pytest.approx(6.9)
    assert a.severity == Severity.high
    assert "above" in a.description


def test_iqr_degenerate_inputs(points):
    assert iqr(points([5, 5, 5, 5, 5, 50]), 1.5) == []
    assert iqr(points([1, 2, 100]), 1.5) == []


@pytest.mark.parametrize("value", [0.1, 0.3, 1.1, 2.7, 55.55])
def test_fractional_constant_series_has_no_anomalies(points, value):
    series = points([value] * 30)
    assert detect_anomalies(series, 0.5) == []
    assert zscore(series, _summary(series), 0.5) == []
    assert modified_zscore(series, _summary(series), 0.5) == []
    assert grubbs(series, _summary(series), 0.2) == []
