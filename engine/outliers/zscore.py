"""
Z-score and modified (MAD based) Z-score outlier detection over a validated sample, using a precomputed statistical summary.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord, StatisticalSummary
from config import settings
from engine.enums import Severity
from engine.statistics.summary import is_dispersed


def zscore(
    points: Sequence[TimeSeriesPoint],
    summary: StatisticalSummary,
    threshold: float,
    levels: Iterable[Tuple[float, str]] | None = None,
) -> List[AnomalyRecord]:
    if levels is None:
        levels = settings.deviation_severity_ratios
    levels = list(levels)
    std = summary.standard_deviation
    if not is_dispersed(std) or not np.isfinite(summary.mean):
        return []

    anomalies: List[AnomalyRecord] = []
    for p in points:
        deviation = abs(p.value - summary.mean) / std
        if not deviation > threshold:
            continue
        anomalies.append(AnomalyRecord(
            timestamp=p.timestamp,
            value=p.value,
            expected_value=summary.mean,
            deviation=deviation,
            severity=Severity.from_ratio(deviation / threshold, levels),
            description=f"Value deviates {deviation:.2f} standard deviations from mean",
        ))
    return anomalies


def modified_zscore(
    points: Sequence[TimeSeriesPoint],
    summary: StatisticalSummary,
    threshold: float,
    levels: Iterable[Tuple[float, str]] | None = None,
) -> List[AnomalyRecord]:
    if levels is None:
        levels = settings.analysis_severity_ratios
    levels = list(levels)
    mad = summary.mad
    # constant (or mostly constant) series: nothing can be scored
    if not is_dispersed(mad):
        return []

    scale = settings.modified_zscore_scale
    anomalies: List[AnomalyRecord] = []
    for p in points:
        score = scale * (p.value - summary.median) / mad
        deviation = abs(score)
        if not deviation > threshold:
            continue
        anomalies.append(AnomalyRecord(
            timestamp=p.timestamp,
            value=p.value,
            expected_value=summary.median,
            deviation=deviation,
            severity=Severity.from_ratio(deviation / threshold, levels),
            description=f"Modified Z-score anomaly: {score:+.2f} (threshold: {threshold})",
        ))
    return anomalies
