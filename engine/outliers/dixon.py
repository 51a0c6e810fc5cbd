"""
Dixon's Q test for outliers at either end of a small sample, using tabulated r10 critical values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord, StatisticalSummary
from config import DIXON_CRITICAL_VALUES, settings
from engine.enums import Severity


def critical_q(n: int, confidence: float | None = None) -> Optional[float]:
    if confidence is None:
        confidence = settings.dixon_confidence
    return DIXON_CRITICAL_VALUES.get(confidence, {}).get(n)


def _record(point: TimeSeriesPoint, q: float, q_crit: float, side: str, mean: float) -> AnomalyRecord:
    return AnomalyRecord(
        timestamp=point.timestamp,
        value=point.value,
        expected_value=mean,
        deviation=q,
        severity=Severity.from_ratio(q / q_crit, settings.dixon_severity_ratios),
        description=f"Dixon Q-test anomaly ({side}): Q={q:.3f} (critical: {q_crit})",
    )


def dixon(
    points: Sequence[TimeSeriesPoint],
    summary: StatisticalSummary,
    confidence: float | None = None,
) -> List[AnomalyRecord]:
    n = len(points)
    if n > settings.dixon_max_samples:
        return []
    q_crit = critical_q(n, confidence)
    if q_crit is None:
        return []

    ordered = sorted(points, key=lambda p: p.value)
    lowest, second = ordered[0], ordered[1]
    highest, penultimate = ordered[-1], ordered[-2]
    spread = highest.value - lowest.value
    if not spread > 0:
        return []

    anomalies: List[AnomalyRecord] = []
    q_low = (second.value - lowest.value) / spread
    if q_low > q_crit:
        anomalies.append(_record(lowest, q_low, q_crit, "low", summary.mean))
    q_high = (highest.value - penultimate.value) / spread
    if q_high > q_crit:
        anomalies.append(_record(highest, q_high, q_crit, "high", summary.mean))
    return sorted(anomalies, key=lambda a: a.timestamp)
