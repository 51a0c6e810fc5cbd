"""
Trend change detection: fits a least-squares line to each of two adjacent windows and flags the boundary when slope, volatility or level shift significantly between them.

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
from engine.dedup import deduplicate
from engine.enums import Severity
from engine.options import TrendChangeOptions
from engine.statistics.summary import population_std
from engine.statistics.trend import fit
from engine.validation import normalize, require_samples, values_of

log = logging.getLogger(__name__)


def minimum_samples(window_size: int) -> int:
    return window_size * settings.trend_window_multiple


def _severity(
    reversal: bool,
    before_slope: float,
    level_percent: float,
    volatility_ratio: float,
    options: TrendChangeOptions,
) -> Severity:
    if (
        (reversal and abs(before_slope) > options.trend_threshold * 2)
        or level_percent > settings.trend_high_level_shift_percent
        or volatility_ratio > options.volatility_threshold * 2
    ):
        return Severity.high
    if (
        reversal
        or level_percent > settings.trend_medium_level_shift_percent
        or volatility_ratio > options.volatility_threshold * 1.5
    ):
        return Severity.medium
    return Severity.low


def detect(data: Iterable[TimeSeriesPoint], options: TrendChangeOptions | None = None) -> List[AnomalyRecord]:
    if options is None:
        options = TrendChangeOptions()
    options.validate()

    points = normalize(data)
    window = options.window_size
    require_samples(len(points), minimum_samples(window), "trend change detection")

    vals = values_of(points)
    n = len(vals)
    step = max(1, window // 2)
    results: List[AnomalyRecord] = []

    for b in range(window, n - window + 1, step):
        before = vals[b - window:b]
        after = vals[b:b + window]
        before_line = fit(before)
        after_line = fit(after)

        slope_change = abs(after_line.slope - before_line.slope)
        reversal = (before_line.slope > 0) != (after_line.slope > 0) and abs(before_line.slope) > options.trend_threshold

        s_before, s_after = population_std(before), population_std(after)
        if s_before > 0:
            ratio = s_after / s_before
            inverse = s_before / max(s_after, 1e-12 * s_before)
        else:
            ratio = inverse = 1.0
        volatile = ratio > options.volatility_threshold or ratio < 1.0 / options.volatility_threshold

        m_before, m_after = float(before.mean()), float(after.mean())
        level = abs(m_after - m_before)
        level_percent = level / abs(m_before) * 100.0 if m_before != 0 else 0.0
        level_shift = level_percent > options.level_shift_percent

        significant_slope = slope_change > options.trend_threshold
        if not (significant_slope or reversal or volatile or level_shift):
            continue

        deviation = max(
            slope_change / options.trend_threshold,
            max(ratio, inverse) / options.volatility_threshold,
            level_percent / options.level_shift_percent,
        )

        changes: list[str] = []
        if significant_slope:
            changes.append(f"slope change: {slope_change:.4f}")
        if reversal:
            changes.append("trend direction reversal")
        if volatile:
            changes.append(f"volatility change: {ratio:.2f}x")
        if level_shift:
            changes.append(f"level shift: {level_percent:.1f}%")

        point = points[b]
        results.append(AnomalyRecord(
            timestamp=point.timestamp,
            value=point.value,
            expected_value=before_line.slope * window + before_line.intercept,
            deviation=deviation,
            severity=_severity(reversal, before_line.slope, level_percent, ratio, options),
            description=f"Significant trend change: {', '.join(changes)}",
        ))

    log.debug(
        "trend change detection points=%d changes=%d window=%d",
        n, len(results), window,
    )
    return deduplicate(results)
