"""
Grubbs' test for a single outlier in an approximately normal sample, with the two-sided critical value derived from the Student t distribution.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np
from scipy.stats import t as student_t

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord, StatisticalSummary
from config import settings
from engine.enums import Severity
from engine.statistics.summary import is_dispersed


def critical_value(n: int, alpha: float) -> float:
    """Two-sided Grubbs critical value for ``n`` samples at significance ``alpha``."""
    if n < 3:
        return math.inf
    t = float(student_t.ppf(1.0 - alpha / (2.0 * n), n - 2))
    t2 = t * t
    return (n - 1) / math.sqrt(n) * math.sqrt(t2 / (n - 2 + t2))


def grubbs(
    points: Sequence[TimeSeriesPoint],
    summary: StatisticalSummary,
    alpha: float | None = None,
) -> List[AnomalyRecord]:
    if alpha is None:
        alpha = settings.grubbs_alpha
    n = len(points)
    std = summary.standard_deviation
    if n < max(3, settings.grubbs_min_samples) or not is_dispersed(std):
        return []

    vals = np.array([p.value for p in points], dtype=float)
    distances = np.abs(vals - summary.mean)
    idx = int(np.argmax(distances))
    # the critical values assume the sample (n - 1) standard deviation
    sample_std = std * math.sqrt(n / (n - 1))
    g = float(distances[idx] / sample_std)
    g_crit = critical_value(n, alpha)
    if not np.isfinite(g_crit) or not g > g_crit:
        return []

    suspect = points[idx]
    return [AnomalyRecord(
        timestamp=suspect.timestamp,
        value=suspect.value,
        expected_value=summary.mean,
        deviation=g,
        severity=Severity.from_ratio(g / g_crit, settings.grubbs_severity_ratios),
        description=f"Grubbs test anomaly: G={g:.2f} (critical: {g_crit:.2f}, alpha: {alpha})",
    )]
