"""
Enumerations for Severity, Sample Quality, Detection Methods and Detection Sources

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple

from config import (
    QUALITY_CODE_GOOD,
    QUALITY_CODE_UNCERTAIN,
    SEVERITY_WEIGHTS,
)


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

    @classmethod
    def from_ratio(cls, ratio: float, levels: Iterable[Tuple[float, str]]) -> Severity:
        # levels are (ratio, label) pairs; the first one strictly exceeded wins,
        # so they must be listed from the highest ratio down.
        for cutoff, label in sorted(levels, key=lambda item: item[0], reverse=True):
            if ratio > cutoff:
                return cls(label)
        return cls.low

    def weight(self) -> int:
        return SEVERITY_WEIGHTS[self.value]


class Quality(str, Enum):
    good = "good"
    bad = "bad"
    uncertain = "uncertain"

    @classmethod
    def from_code(cls, code: int) -> Quality:
        if code == QUALITY_CODE_GOOD:
            return cls.good
        if code == QUALITY_CODE_UNCERTAIN:
            return cls.uncertain
        # unknown historian codes are treated as bad
        return cls.bad


class DetectionMethod(str, Enum):
    zscore = "zscore"
    modified_zscore = "modified-zscore"
    grubbs = "grubbs"
    dixon = "dixon"


class DetectionSource(str, Enum):
    statistical_deviation = "statistical-deviation"
    advanced_multi_algorithm = "advanced-multi-algorithm"
    pattern_change = "pattern-change"
    trend_change = "trend-change"
