"""
Least-squares trend line fitting over sample index, with correlation and R-squared confidence, plus moving average and period-over-period percentage change helpers used by trend reporting.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from api.requests import TimeSeriesPoint
from engine.exceptions import AnalyticsError
from engine.statistics.descriptive import calculate_statistics
from engine.validation import normalize, require_samples, require_window, values_of

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendLine:
    slope: float
    intercept: float
    correlation: float
    equation: str
    confidence: float


def _linear_fit(vals: Sequence[float] | np.ndarray) -> tuple[float, float]:
    v = np.asarray(vals, dtype=float)
    x = np.arange(len(v), dtype=float)
    slope, intercept = np.polyfit(x, v, 1)
    return float(slope), float(intercept)


def _correlation(vals: Sequence[float] | np.ndarray) -> float:
    v = np.asarray(vals, dtype=float)
    x = np.arange(len(v), dtype=float)
    dx = x - x.mean()
    dv = v - v.mean()
    denominator = float(np.sqrt(np.sum(dx ** 2) * np.sum(dv ** 2)))
    if denominator == 0:
        return 0.0
    return float(np.clip(np.sum(dx * dv) / denominator, -1.0, 1.0))


def _equation(slope: float, intercept: float) -> str:
    sign = "+" if intercept >= 0 else "-"
    return f"y = {slope:.4f}x {sign} {abs(intercept):.4f}"


def fit(vals: Sequence[float] | np.ndarray) -> TrendLine:
    slope, intercept = _linear_fit(vals)
    correlation = _correlation(vals)
    return TrendLine(
        slope=slope,
        intercept=intercept,
        correlation=correlation,
        equation=_equation(slope, intercept),
        confidence=correlation ** 2,
    )


def calculate_trend_line(data: Iterable[TimeSeriesPoint]) -> TrendLine:
    points = normalize(data)
    require_samples(len(points), 2, "trend analysis")
    line = fit(values_of(points))
    log.debug(
        "trend line slope=%.6f intercept=%.6f r=%.4f points=%d",
        line.slope, line.intercept, line.correlation, len(points),
    )
    return line


def calculate_moving_average(data: Iterable[TimeSeriesPoint], window_size: int) -> List[TimeSeriesPoint]:
    require_window("window_size", window_size)
    points = normalize(data)
    if window_size > len(points):
        raise AnalyticsError(
            f"Window size {window_size} cannot be larger than dataset ({len(points)} points)"
        )

    vals = values_of(points)
    sums = np.convolve(vals, np.ones(window_size), mode="valid") / window_size
    averaged = [
        points[i + window_size - 1].model_copy(update={"value": float(avg)})
        for i, avg in enumerate(sums)
    ]
    log.debug(
        "moving average original=%d result=%d window=%d",
        len(points), len(averaged), window_size,
    )
    return averaged


def calculate_percentage_change(
    start_data: Iterable[TimeSeriesPoint],
    end_data: Iterable[TimeSeriesPoint],
) -> float:
    start = calculate_statistics(start_data)
    end = calculate_statistics(end_data)
    if start.average == 0:
        raise AnalyticsError("Cannot calculate percentage change with zero starting value")
    return (end.average - start.average) / start.average * 100.0
