"""
Multi-algorithm anomaly detection that combines z-score deviation, interquartile fencing and, optionally, windowed trend change and hour-of-day seasonal analysis into one deduplicated, chronologically ordered list.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord
from config import settings
from engine.baseline import detect_seasonal_anomalies
from engine.changepoint import trend
from engine.dedup import deduplicate
from engine.options import AdvancedOptions, TrendChangeOptions
from engine.outliers import iqr, zscore
from engine.statistics.summary import summarize
from engine.validation import normalize, require_samples, values_of

log = logging.getLogger(__name__)


def minimum_samples(window_size: int) -> int:
    return max(settings.advanced_min_samples, window_size * 2)


def detect(data: Iterable[TimeSeriesPoint], options: AdvancedOptions | None = None) -> List[AnomalyRecord]:
    if options is None:
        options = AdvancedOptions()
    options.validate()

    points = normalize(data)
    window = options.window_size
    require_samples(len(points), minimum_samples(window), "advanced anomaly detection")

    summary = summarize(values_of(points))
    statistical = zscore(points, summary, options.statistical_threshold)
    fenced = iqr(points, options.iqr_multiplier)

    trend_changes: List[AnomalyRecord] = []
    # trend comparison needs a before, after and confirmation window
    if options.enable_trend_analysis and len(points) >= trend.minimum_samples(window):
        trend_changes = trend.detect(points, TrendChangeOptions(window_size=window))

    seasonal: List[AnomalyRecord] = []
    if options.enable_seasonal_analysis and len(points) >= settings.seasonal_min_samples:
        seasonal = detect_seasonal_anomalies(points)

    unique = deduplicate([*statistical, *fenced, *trend_changes, *seasonal])
    log.debug(
        "advanced detection points=%d statistical=%d iqr=%d trend=%d seasonal=%d unique=%d",
        len(points), len(statistical), len(fenced), len(trend_changes), len(seasonal), len(unique),
    )
    return unique
