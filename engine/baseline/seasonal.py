"""
Seasonal baseline logic that groups samples by hour of day and flags values deviating from their hour's typical level, to catch anomalies hidden inside a daily operating cycle.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord
from config import settings
from engine.enums import Severity
from engine.statistics.summary import population_std


@dataclass(frozen=True)
class HourBaseline:
    hour: int
    mean: float
    std: float
    sample_count: int


def _hour_buckets(points: Sequence[TimeSeriesPoint]) -> List[int]:
    return [p.timestamp.hour for p in points]


def hourly_baselines(points: Sequence[TimeSeriesPoint]) -> Dict[int, HourBaseline]:
    bucket_map: Dict[int, List[float]] = {}
    for b, p in zip(_hour_buckets(points), points):
        bucket_map.setdefault(b, []).append(p.value)

    baselines: Dict[int, HourBaseline] = {}
    for hour, vals in bucket_map.items():
        if len(vals) < 2:
            continue
        arr = np.array(vals, dtype=float)
        baselines[hour] = HourBaseline(
            hour=hour,
            mean=float(arr.mean()),
            std=population_std(arr),
            sample_count=len(vals),
        )
    return baselines


def detect(points: Sequence[TimeSeriesPoint], threshold: float | None = None) -> List[AnomalyRecord]:
    if threshold is None:
        threshold = settings.seasonal_threshold
    if len(points) < settings.seasonal_min_samples:
        return []

    baselines = hourly_baselines(points)
    anomalies: List[AnomalyRecord] = []
    for hour, p in zip(_hour_buckets(points), points):
        base = baselines.get(hour)
        if base is None or not base.std > 0:
            continue
        deviation = abs(p.value - base.mean) / base.std
        if not deviation > threshold:
            continue
        anomalies.append(AnomalyRecord(
            timestamp=p.timestamp,
            value=p.value,
            expected_value=base.mean,
            deviation=deviation,
            severity=Severity.from_ratio(deviation, settings.seasonal_severity_levels),
            description=(
                f"Seasonal anomaly: value deviates {deviation:.2f} standard deviations "
                f"from hour {hour} pattern"
            ),
        ))
    return anomalies
