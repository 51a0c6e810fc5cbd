"""
Validation and normalisation of historian samples before analysis: chronological ordering, removal of non-finite values and eager checks on sample counts and configuration values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Sequence

import numpy as np

from api.requests import TimeSeriesPoint
from config import settings
from engine.enums import Quality
from engine.exceptions import InsufficientDataError, InvalidConfigurationError

log = logging.getLogger(__name__)


def normalize(data: Iterable[TimeSeriesPoint]) -> List[TimeSeriesPoint]:
    points = list(data or [])
    usable = [p for p in points if math.isfinite(p.value)]
    if settings.exclude_bad_quality:
        usable = [p for p in usable if p.quality != Quality.bad]
    dropped = len(points) - len(usable)
    if dropped:
        log.debug("normalize: dropped %d of %d points", dropped, len(points))
    return sorted(usable, key=lambda p: p.timestamp)


def values_of(points: Sequence[TimeSeriesPoint]) -> np.ndarray:
    return np.array([p.value for p in points], dtype=float)


def require_samples(count: int, minimum: int, analysis: str) -> None:
    if count < minimum:
        raise InsufficientDataError(analysis, count, minimum)


def require_positive(name: str, value: float) -> None:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(numeric) or numeric <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value!r}")


def require_window(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value!r}")
