"""
Interquartile range fencing: points outside [Q1 - k*IQR, Q3 + k*IQR] are outliers, with deviation measured as the distance beyond the crossed fence in units of IQR.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord
from config import settings
from engine.enums import Severity
from engine.statistics.summary import is_dispersed, quartiles


def iqr(points: Sequence[TimeSeriesPoint], multiplier: float | None = None) -> List[AnomalyRecord]:
    if multiplier is None:
        multiplier = settings.iqr_multiplier
    if len(points) < settings.iqr_min_samples:
        return []

    q1, q3 = quartiles([p.value for p in points])
    spread = q3 - q1
    # a zero IQR cannot scale deviations; treat the sample as inlying
    if not is_dispersed(spread):
        return []

    lower = q1 - multiplier * spread
    upper = q3 + multiplier * spread

    anomalies: List[AnomalyRecord] = []
    for p in points:
        if lower <= p.value <= upper:
            continue
        below = p.value < lower
        fence = lower if below else upper
        deviation = abs(p.value - fence) / spread
        if not deviation > 0:
            continue
        anomalies.append(AnomalyRecord(
            timestamp=p.timestamp,
            value=p.value,
            expected_value=fence,
            deviation=deviation,
            severity=Severity.from_ratio(deviation / multiplier, settings.iqr_severity_ratios),
            description=(
                f"IQR outlier: value {'below' if below else 'above'} expected range "
                f"[{lower:.2f}, {upper:.2f}]"
            ),
        ))
    return anomalies
