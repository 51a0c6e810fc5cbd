"""
Descriptive statistics for a tag's samples: range, average, standard deviation and the share of good-quality points.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from api.requests import TimeSeriesPoint
from engine.enums import Quality
from engine.statistics.summary import population_std
from engine.validation import normalize, require_samples, values_of

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BasicStatistics:
    min: float
    max: float
    average: float
    standard_deviation: float
    count: int
    data_quality: float


def calculate_statistics(data: Iterable[TimeSeriesPoint]) -> BasicStatistics:
    raw = list(data or [])
    require_samples(len(raw), 1, "statistics")
    points = normalize(raw)
    require_samples(len(points), 1, "statistics")

    arr = values_of(points)
    good = sum(1 for p in raw if p.quality == Quality.good)
    stats = BasicStatistics(
        min=float(arr.min()),
        max=float(arr.max()),
        average=float(arr.mean()),
        standard_deviation=population_std(arr),
        count=int(arr.size),
        data_quality=good / len(raw) * 100.0,
    )
    log.debug(
        "statistics count=%d min=%.4g max=%.4g average=%.4g std=%.4g quality=%.1f",
        stats.count, stats.min, stats.max, stats.average, stats.standard_deviation, stats.data_quality,
    )
    return stats
