"""
Statistical summary calculation (mean, median, population standard deviation and median absolute deviation) shared by every detector, plus quartile estimation for interquartile fencing.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from api.responses import StatisticalSummary
from engine.exceptions import InsufficientDataError


def population_std(values: Sequence[float] | np.ndarray) -> float:
    """Population standard deviation, exactly zero when every value is identical."""
    arr = np.asarray(values, dtype=float)
    # rounding in the mean leaves a tiny residue for constant fractional series
    if arr.size == 0 or float(np.ptp(arr)) == 0.0:
        return 0.0
    return float(np.std(arr))


def summarize(values: Sequence[float] | np.ndarray) -> StatisticalSummary:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise InsufficientDataError("statistical summary", 0, 1)

    mean = float(np.mean(arr))
    median = float(np.median(arr))
    std = population_std(arr)
    mad = float(np.median(np.abs(arr - median)))
    return StatisticalSummary(
        mean=mean,
        median=median,
        standard_deviation=max(std, 0.0),
        mad=max(mad, 0.0),
    )


def is_dispersed(spread: float) -> bool:
    """True when a dispersion value can safely be used as a divisor."""
    return bool(np.isfinite(spread)) and spread > 0


def quartiles(values: Sequence[float] | np.ndarray) -> Tuple[float, float]:
    arr = np.asarray(values, dtype=float)
    q1, q3 = np.percentile(arr, [25.0, 75.0])
    return float(q1), float(q3)
