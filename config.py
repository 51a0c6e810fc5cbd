"""
Constants and configuration for the Historian Anomaly Engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Tuple

from pydantic_settings import BaseSettings


# historian (OPC-style) quality codes; any other code, including 0, is bad
QUALITY_CODE_GOOD = 192
QUALITY_CODE_UNCERTAIN = 64

# weight values assigned to severity labels for comparison and deduplication
SEVERITY_WEIGHTS: dict[str, int] = {
    "low": 1,
    "medium": 2,
    "high": 4,
}

# Dixon r10 critical values (Rorabacher, 1991) keyed by confidence level and
# sample size.  Samples outside 3..30 are not tested.
DIXON_CRITICAL_VALUES: Dict[float, Dict[int, float]] = {
    0.90: {
        3: 0.941, 4: 0.765, 5: 0.642, 6: 0.560, 7: 0.507, 8: 0.468, 9: 0.437,
        10: 0.412, 11: 0.392, 12: 0.376, 13: 0.361, 14: 0.349, 15: 0.338,
        16: 0.329, 17: 0.320, 18: 0.313, 19: 0.306, 20: 0.300, 21: 0.295,
        22: 0.290, 23: 0.285, 24: 0.281, 25: 0.277, 26: 0.273, 27: 0.269,
        28: 0.266, 29: 0.263, 30: 0.260,
    },
    0.95: {
        3: 0.970, 4: 0.829, 5: 0.710, 6: 0.625, 7: 0.568, 8: 0.526, 9: 0.493,
        10: 0.466, 11: 0.444, 12: 0.426, 13: 0.410, 14: 0.396, 15: 0.384,
        16: 0.374, 17: 0.365, 18: 0.356, 19: 0.349, 20: 0.342, 21: 0.337,
        22: 0.331, 23: 0.326, 24: 0.321, 25: 0.317, 26: 0.312, 27: 0.308,
        28: 0.305, 29: 0.301, 30: 0.298,
    },
    0.99: {
        3: 0.994, 4: 0.926, 5: 0.821, 6: 0.740, 7: 0.680, 8: 0.634, 9: 0.598,
        10: 0.568, 11: 0.542, 12: 0.522, 13: 0.503, 14: 0.488, 15: 0.475,
        16: 0.463, 17: 0.452, 18: 0.442, 19: 0.433, 20: 0.425, 21: 0.418,
        22: 0.411, 23: 0.404, 24: 0.399, 25: 0.393, 26: 0.388, 27: 0.384,
        28: 0.380, 29: 0.376, 30: 0.372,
    },
}

DEFAULT_DEVIATION_METHODS: List[str] = ["zscore", "modified-zscore"]

API_PREFIX = "/api/v1"


class Settings(BaseSettings):
    # validation
    min_samples: int = int(os.getenv("ANOMALY_ENGINE_MIN_SAMPLES", "3"))
    exclude_bad_quality: bool = False

    # z-score detection used by detect_anomalies and the flagger
    zscore_threshold: float = float(os.getenv("ANOMALY_ENGINE_ZSCORE_THRESHOLD", "2.0"))
    # (ratio of deviation to threshold, severity label) checked top-down
    deviation_severity_ratios: List[Tuple[float, str]] = [
        (2.0, "high"),
        (1.5, "medium"),
    ]

    # per-method deviation analysis
    analysis_zscore_threshold: float = 2.5
    analysis_modified_zscore_threshold: float = 3.5
    analysis_severity_ratios: List[Tuple[float, str]] = [
        (1.5, "high"),
        (1.2, "medium"),
    ]
    modified_zscore_scale: float = 0.6745

    # grubbs
    grubbs_alpha: float = 0.05
    grubbs_min_samples: int = 7
    grubbs_severity_ratios: List[Tuple[float, str]] = [
        (1.3, "high"),
        (1.0, "medium"),
    ]

    # dixon
    dixon_confidence: float = 0.95
    dixon_max_samples: int = 30
    dixon_severity_ratios: List[Tuple[float, str]] = [
        (1.2, "high"),
        (1.0, "medium"),
    ]

    # iqr fencing
    iqr_multiplier: float = 1.5
    iqr_min_samples: int = 4
    iqr_severity_ratios: List[Tuple[float, str]] = [
        (2.0, "high"),
        (1.5, "medium"),
    ]

    # windowed pattern change detection
    pattern_window_size: int = 10
    pattern_sensitivity_threshold: float = 1.5
    pattern_min_change_percent: float = 10.0
    pattern_min_samples: int = 20
    pattern_high_change_percent: float = 50.0
    pattern_medium_change_percent: float = 25.0

    # trend change detection
    trend_window_size: int = 20
    trend_threshold: float = 0.05
    trend_volatility_threshold: float = 2.0
    trend_level_shift_percent: float = 15.0
    trend_high_level_shift_percent: float = 50.0
    trend_medium_level_shift_percent: float = 25.0
    # number of windows a series must span before trend changes are evaluated
    trend_window_multiple: int = 3

    # advanced multi-algorithm detection
    advanced_statistical_threshold: float = 2.0
    advanced_iqr_multiplier: float = 1.5
    advanced_window_size: int = 10
    advanced_min_samples: int = 10

    # seasonal (hour of day) detection
    seasonal_min_samples: int = 24
    seasonal_threshold: float = 2.0
    seasonal_severity_levels: List[Tuple[float, str]] = [
        (4.0, "high"),
        (3.0, "medium"),
    ]

    # comprehensive flagging defaults
    flag_statistical_deviation: float = 2.5
    flag_trend_sensitivity: float = 1.5
    flag_pattern_sensitivity: float = 1.5
    flag_window_size: int = 15

    # data quality
    quality_gap_multiplier: float = 2.0

    model_config = {
        "env_prefix": "ANOMALY_ENGINE_",
        "extra": "ignore",
    }


settings = Settings()
