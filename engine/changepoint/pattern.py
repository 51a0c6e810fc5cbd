"""
Windowed pattern change detection: compares the mean and spread of adjacent, non-overlapping windows and flags a boundary when the mean moves by both a relative margin and a number of pooled standard deviations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List

from api.requests import TimeSeriesPoint
from api.responses import AnomalyRecord
from config import settings
from engine.dedup import deduplicate
from engine.enums import Severity
from engine.options import PatternChangeOptions
from engine.statistics.summary import population_std
from engine.validation import normalize, require_samples, values_of

log = logging.getLogger(__name__)


def minimum_samples(window_size: int) -> int:
    return max(settings.pattern_min_samples, window_size * 2)


def _severity(change_percent: float) -> Severity:
    if change_percent > settings.pattern_high_change_percent:
        return Severity.high
    if change_percent > settings.pattern_medium_change_percent:
        return Severity.medium
    return Severity.low


def _relative_change(before: float, after: float) -> float:
    delta = abs(after - before)
    # fall back to the later mean when the earlier window averages to zero
    base = abs(before) if before != 0 else abs(after)
    return delta / base * 100.0 if base > 0 else 0.0


def detect(data: Iterable[TimeSeriesPoint], options: PatternChangeOptions | None = None) -> List[AnomalyRecord]:
    if options is None:
        options = PatternChangeOptions()
    options.validate()

    points = normalize(data)
    window = options.window_size
    require_samples(len(points), minimum_samples(window), "pattern change detection")

    vals = values_of(points)
    n = len(vals)
    results: List[AnomalyRecord] = []

    for b in range(window, n - window + 1, options.boundary_step):
        before = vals[b - window:b]
        after = vals[b:b + window]
        m1, m2 = float(before.mean()), float(after.mean())
        s1, s2 = population_std(before), population_std(after)
        delta = abs(m2 - m1)
        if delta == 0:
            continue

        pooled = math.sqrt((s1 * s1 + s2 * s2) / 2.0)
        pooled = max(pooled, 1e-9 * max(abs(m1), abs(m2), 1.0))
        shift = delta / pooled
        change_percent = _relative_change(m1, m2)

        if not (change_percent > options.min_change_percent and shift > options.sensitivity_threshold):
            continue

        changes = [f"mean shifted by {change_percent:.1f}%", f"{shift:.2f} pooled standard deviations"]
        if s1 > 0 and s2 > 0 and max(s1, s2) / min(s1, s2) >= 2.0:
            changes.append(f"spread changed from {s1:.3g} to {s2:.3g}")

        results.append(AnomalyRecord(
            timestamp=points[b].timestamp,
            value=m2,
            expected_value=m1,
            deviation=shift,
            severity=_severity(change_percent),
            description=f"Pattern change detected: {', '.join(changes)}",
        ))

    log.debug(
        "pattern change detection points=%d changes=%d window=%d sensitivity=%s",
        n, len(results), window, options.sensitivity_threshold,
    )
    return deduplicate(results)
