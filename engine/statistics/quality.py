"""
Data quality reporting for historian samples: quality code tallies and detection of missing-data gaps relative to the typical sampling interval.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from api.requests import TimeSeriesPoint
from config import settings
from engine.enums import Quality


@dataclass(frozen=True)
class DataQualityReport:
    total_points: int
    good_quality: int
    bad_quality: int
    uncertain_quality: int
    quality_percentage: float
    missing_data_gaps: int


def _missing_gaps(points: list[TimeSeriesPoint], multiplier: float) -> int:
    if len(points) < 2:
        return 0
    ordered = sorted(p.timestamp for p in points)
    intervals = np.array(
        [(b - a).total_seconds() for a, b in zip(ordered, ordered[1:])],
        dtype=float,
    )
    # upper median interval
    typical = float(np.sort(intervals)[len(intervals) // 2])
    return int(np.sum(intervals > typical * multiplier))


def calculate_data_quality(data: Iterable[TimeSeriesPoint], gap_multiplier: float | None = None) -> DataQualityReport:
    if gap_multiplier is None:
        gap_multiplier = settings.quality_gap_multiplier
    points = list(data or [])
    if not points:
        return DataQualityReport(
            total_points=0,
            good_quality=0,
            bad_quality=0,
            uncertain_quality=0,
            quality_percentage=0.0,
            missing_data_gaps=0,
        )

    good = sum(1 for p in points if p.quality == Quality.good)
    uncertain = sum(1 for p in points if p.quality == Quality.uncertain)
    bad = len(points) - good - uncertain

    return DataQualityReport(
        total_points=len(points),
        good_quality=good,
        bad_quality=bad,
        uncertain_quality=uncertain,
        quality_percentage=good / len(points) * 100.0,
        missing_data_gaps=_missing_gaps(points, gap_multiplier),
    )
