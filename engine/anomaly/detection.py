"""
Detection entry points for historian time series: single-threshold statistical deviation, side-by-side comparison of classical outlier tests, and comprehensive flagging that merges every applicable detector into one ranked report with summary counts.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Sequence

from api.requests import TimeSeriesPoint
from api.responses import (
    AnomalyRecord,
    AnomalySummary,
    FlagResult,
    MethodResult,
    StatisticalSummary,
)
from config import DEFAULT_DEVIATION_METHODS, settings
from engine.anomaly import advanced
from engine.changepoint import pattern, trend
from engine.dedup import deduplicate
from engine.enums import DetectionMethod, DetectionSource, Severity
from engine.exceptions import InvalidConfigurationError
from engine.options import (
    AdvancedOptions,
    DeviationAnalysisOptions,
    FlagThresholds,
    PatternChangeOptions,
    TrendChangeOptions,
)
from engine.outliers import dixon, grubbs, iqr, modified_zscore, zscore
from engine.statistics.summary import summarize
from engine.validation import normalize, require_positive, require_samples, values_of

log = logging.getLogger(__name__)

MethodDetector = Callable[
    [Sequence[TimeSeriesPoint], StatisticalSummary, DeviationAnalysisOptions],
    List[AnomalyRecord],
]


def _zscore_method(points, summary, options):
    return zscore(points, summary, options.zscore_threshold, settings.analysis_severity_ratios)


def _modified_zscore_method(points, summary, options):
    return modified_zscore(points, summary, options.modified_zscore_threshold)


def _grubbs_method(points, summary, options):
    return grubbs(points, summary, options.grubbs_alpha)


def _dixon_method(points, summary, options):
    return dixon(points, summary, options.dixon_confidence)


_METHODS: Dict[DetectionMethod, MethodDetector] = {
    DetectionMethod.zscore: _zscore_method,
    DetectionMethod.modified_zscore: _modified_zscore_method,
    DetectionMethod.grubbs: _grubbs_method,
    DetectionMethod.dixon: _dixon_method,
}


def _parse_methods(methods: Iterable[str | DetectionMethod] | None) -> List[DetectionMethod]:
    if methods is None:
        methods = DEFAULT_DEVIATION_METHODS
    if isinstance(methods, (str, DetectionMethod)):
        methods = [methods]
    parsed: List[DetectionMethod] = []
    for m in methods:
        if isinstance(m, DetectionMethod):
            parsed.append(m)
            continue
        try:
            parsed.append(DetectionMethod(str(m).strip().lower()))
        except ValueError:
            known = ", ".join(d.value for d in DetectionMethod)
            raise InvalidConfigurationError(
                f"Unknown detection method {m!r}; expected one of: {known}"
            ) from None
    return parsed


def detect_anomalies(data: Iterable[TimeSeriesPoint], threshold: float | None = None) -> List[AnomalyRecord]:
    if threshold is None:
        threshold = settings.zscore_threshold
    require_positive("threshold", threshold)

    points = normalize(data)
    require_samples(len(points), settings.min_samples, "anomaly detection")

    summary = summarize(values_of(points))
    anomalies = deduplicate(zscore(points, summary, threshold))
    log.debug(
        "anomaly detection points=%d anomalies=%d threshold=%s",
        len(points), len(anomalies), threshold,
    )
    return anomalies


def perform_statistical_deviation_analysis(
    data: Iterable[TimeSeriesPoint],
    methods: Iterable[str | DetectionMethod] | None = None,
    options: DeviationAnalysisOptions | None = None,
) -> List[MethodResult]:
    if options is None:
        options = DeviationAnalysisOptions()
    options.validate()
    requested = _parse_methods(methods)

    points = normalize(data)
    require_samples(len(points), settings.min_samples, "statistical deviation analysis")

    summary = summarize(values_of(points))
    results: List[MethodResult] = []
    for method in requested:
        anomalies = deduplicate(_METHODS[method](points, summary, options))
        results.append(MethodResult(method=method, anomalies=anomalies, statistics=summary))

    log.debug(
        "deviation analysis points=%d methods=%s anomalies=%s",
        len(points),
        [m.value for m in requested],
        [len(r.anomalies) for r in results],
    )
    return results


def summarize_anomalies(
    anomalies: Sequence[AnomalyRecord],
    sample_count: int,
    methods: Sequence[DetectionSource],
) -> AnomalySummary:
    counts = {s: 0 for s in Severity}
    for a in anomalies:
        counts[a.severity] += 1
    total = len(anomalies)
    rate = min(100.0, total / sample_count * 100.0) if sample_count > 0 else 0.0
    return AnomalySummary(
        total_anomalies=total,
        high_severity=counts[Severity.high],
        medium_severity=counts[Severity.medium],
        low_severity=counts[Severity.low],
        anomaly_rate=rate,
        detection_methods=list(methods),
    )


def flag_anomalies(data: Iterable[TimeSeriesPoint], thresholds: FlagThresholds | None = None) -> FlagResult:
    if thresholds is None:
        thresholds = FlagThresholds()
    thresholds.validate()

    points = normalize(data)
    n = len(points)
    require_samples(n, settings.min_samples, "anomaly flagging")

    window = thresholds.window_size
    collected: List[AnomalyRecord] = []
    methods: List[DetectionSource] = []

    summary = summarize(values_of(points))
    collected.extend(zscore(points, summary, thresholds.statistical_deviation))
    collected.extend(iqr(points, thresholds.iqr_multiplier))
    methods.append(DetectionSource.statistical_deviation)

    if thresholds.enable_advanced and n >= advanced.minimum_samples(window):
        collected.extend(advanced.detect(points, AdvancedOptions(
            statistical_threshold=thresholds.statistical_deviation,
            iqr_multiplier=thresholds.iqr_multiplier,
            enable_trend_analysis=True,
            window_size=window,
            enable_seasonal_analysis=thresholds.enable_seasonal,
        )))
        methods.append(DetectionSource.advanced_multi_algorithm)

    if thresholds.enable_pattern_detection and n >= pattern.minimum_samples(window):
        collected.extend(pattern.detect(points, PatternChangeOptions(
            window_size=window,
            sensitivity_threshold=thresholds.pattern_sensitivity,
            min_change_percent=thresholds.min_change_percent,
        )))
        methods.append(DetectionSource.pattern_change)

    if thresholds.enable_trend_detection and n >= trend.minimum_samples(window):
        collected.extend(trend.detect(points, TrendChangeOptions(
            window_size=window,
            trend_threshold=settings.trend_threshold / thresholds.trend_sensitivity,
            volatility_threshold=settings.trend_volatility_threshold * thresholds.trend_sensitivity,
        )))
        methods.append(DetectionSource.trend_change)

    unique = deduplicate(collected)
    report = summarize_anomalies(unique, n, methods)
    log.info(
        "anomaly flagging completed points=%d total=%d high=%d medium=%d low=%d rate=%.2f methods=%s",
        n,
        report.total_anomalies,
        report.high_severity,
        report.medium_severity,
        report.low_severity,
        report.anomaly_rate,
        [m.value for m in report.detection_methods],
    )
    return FlagResult(anomalies=unique, summary=report)
