"""
Test cases for comprehensive anomaly flagging and the side-by-side statistical deviation analysis.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from engine.anomaly import flag_anomalies, perform_statistical_deviation_analysis, summarize_anomalies
from engine.enums import DetectionMethod, DetectionSource, Severity
from engine.exceptions import InsufficientDataError, InvalidConfigurationError
from engine.options import DeviationAnalysisOptions, FlagThresholds


def _series_with_spikes(n=60):
    vals = [20.0 + 2.0 * math.sin(0.4 * i) for i in range(n)]
    vals[n // 6] = 45.0
    vals[2 * n // 3] = -5.0
    return vals


def _assert_consistent(result, n):
    s = result.summary
    assert s.high_severity + s.medium_severity + s.low_severity == s.total_anomalies
    assert s.total_anomalies == len(result.anomalies)
    assert 0.0 <= s.anomaly_rate <= 100.0
    assert s.anomaly_rate == pytest.approx(min(100.0, len(result.anomalies) / n * 100.0))
    keys = [(a.timestamp, a.value) for a in result.anomalies]
    assert len(keys) == len(set(keys))
    assert [a.timestamp for a in result.anomalies] == sorted(a.timestamp for a in result.anomalies)
    assert all(a.deviation > 0 for a in result.anomalies)


def test_flag_runs_every_stage(points):
    series = points(_series_with_spikes())
    result = flag_anomalies(series)
    _assert_consistent(result, len(series))
    assert result.summary.detection_methods == [
        DetectionSource.statistical_deviation,
        DetectionSource.advanced_multi_algorithm,
        DetectionSource.pattern_change,
        DetectionSource.trend_change,
    ]
    flagged = {a.timestamp for a in result.anomalies}
    assert series[10].timestamp in flagged
    assert series[40].timestamp in flagged


def test_flag_skips_stages_on_short_series(points):
    series = points([10.0, 11.0, 12.0])
    result = flag_anomalies(series)
    assert result.summary.total_anomalies == 0
    assert result.anomalies == []
    assert result.summary.anomaly_rate == 0.0
    assert result.summary.detection_methods == [DetectionSource.statistical_deviation]


def test_flag_respects_disabled_stages(points):
    series = points(_series_with_spikes())
    thresholds = FlagThresholds(
        enable_advanced=False, enable_pattern_detection=False, enable_trend_detection=False
    )
    result = flag_anomalies(series, thresholds)
    _assert_consistent(result, len(series))
    assert result.summary.detection_methods == [DetectionSource.statistical_deviation]


def test_flag_requires_three_points(points):
    with pytest.raises(InsufficientDataError) as exc:
        flag_anomalies(points([1.0, 2.0]))
    assert "3 required" in str(exc.value)
    with pytest.raises(InsufficientDataError):
        flag_anomalies(points([1.0, float("nan"), 2.0, float("inf")]))


def test_flag_rejects_bad_thresholds(points):
    with pytest.raises(InvalidConfigurationError):
        flag_anomalies(points(_series_with_spikes()), FlagThresholds(statistical_deviation=0))


def test_summarize_anomalies_clamps_rate(points):
    from api.responses import AnomalyRecord

    series = points([1.0, 2.0])
    records = [
        AnomalyRecord(timestamp=p.timestamp, value=p.value, expected_value=0.0,
                      deviation=1.0, severity=sev, description="")
        for p, sev in zip(series, (Severity.high, Severity.low))
    ]
    report = summarize_anomalies(records, 1, [DetectionSource.statistical_deviation])
    assert report.anomaly_rate == 100.0
    assert report.high_severity == 1 and report.low_severity == 1
    assert summarize_anomalies([], 0, []).anomaly_rate == 0.0


def test_deviation_analysis_returns_requested_methods(points):
    series = points(_series_with_spikes(30))
    results = perform_statistical_deviation_analysis(series, ["zscore", "grubbs"])
    assert [r.method for r in results] == [DetectionMethod.zscore, DetectionMethod.grubbs]
    for r in results:
        assert r.statistics.standard_deviation >= 0
        assert r.statistics == results[0].statistics
    assert all(a.deviation > 2.5 for a in results[0].anomalies)


def test_deviation_analysis_defaults_and_order(points):
    series = points(_series_with_spikes(30))
    default = perform_statistical_deviation_analysis(series)
    assert [r.method for r in default] == [DetectionMethod.zscore, DetectionMethod.modified_zscore]
    reordered = perform_statistical_deviation_analysis(series, ["dixon", "ZSCORE", DetectionMethod.grubbs])
    assert [r.method for r in reordered] == [
        DetectionMethod.dixon, DetectionMethod.zscore, DetectionMethod.grubbs,
    ]
    # thirty points is the last sample size the Q table covers
    assert {a.value for a in reordered[0].anomalies} <= {45.0, -5.0}


def test_deviation_analysis_validation(points):
    series = points(_series_with_spikes(30))
    with pytest.raises(InvalidConfigurationError):
        perform_statistical_deviation_analysis(series, ["zscore", "isolation-forest"])
    with pytest.raises(InvalidConfigurationError):
        perform_statistical_deviation_analysis(series, options=DeviationAnalysisOptions(dixon_confidence=0.97))
    with pytest.raises(InvalidConfigurationError):
        perform_statistical_deviation_analysis(series, options=DeviationAnalysisOptions(grubbs_alpha=1.5))
    with pytest.raises(InsufficientDataError):
        perform_statistical_deviation_analysis(points([1.0, 2.0]), ["grubbs"])


def test_deviation_thresholds_monotonic(points):
    series = points(_series_with_spikes(30))
    loose = perform_statistical_deviation_analysis(
        series, ["zscore", "modified-zscore"],
        DeviationAnalysisOptions(zscore_threshold=1.0, modified_zscore_threshold=1.0),
    )
    strict = perform_statistical_deviation_analysis(
        series, ["zscore", "modified-zscore"],
        DeviationAnalysisOptions(zscore_threshold=3.0, modified_zscore_threshold=6.0),
    )
    for lo, hi in zip(loose, strict):
        assert len(lo.anomalies) >= len(hi.anomalies)


@pytest.mark.parametrize("value", [0.1, 2.7, 55.55])
def test_fractional_constant_series_is_never_flagged(points, value):
    series = points([value] * 60)
    result = flag_anomalies(series, FlagThresholds(statistical_deviation=0.5, enable_seasonal=True))
    assert result.anomalies == []
    assert result.summary.total_anomalies == 0
    results = perform_statistical_deviation_analysis(
        series, ["zscore", "modified-zscore", "grubbs", "dixon"],
        DeviationAnalysisOptions(zscore_threshold=0.5, modified_zscore_threshold=0.5),
    )
    assert all(r.anomalies == [] for r in results)
    assert all(r.statistics.standard_deviation == 0.0 for r in results)
