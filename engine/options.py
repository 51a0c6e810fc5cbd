"""
Per-detector option records with defaults drawn from settings and eager validation at the public boundary.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from config import settings
from engine.exceptions import InvalidConfigurationError
from engine.validation import require_positive, require_window


@dataclass(frozen=True)
class PatternChangeOptions:
    window_size: int = field(default_factory=lambda: settings.pattern_window_size)
    sensitivity_threshold: float = field(default_factory=lambda: settings.pattern_sensitivity_threshold)
    min_change_percent: float = field(default_factory=lambda: settings.pattern_min_change_percent)
    # boundary step; None means one full window so that pairs tile the series
    step: int | None = None

    def validate(self) -> None:
        require_window("window_size", self.window_size)
        require_positive("sensitivity_threshold", self.sensitivity_threshold)
        if self.min_change_percent < 0:
            raise InvalidConfigurationError(
                f"min_change_percent must not be negative, got {self.min_change_percent!r}"
            )
        if self.step is not None:
            require_window("step", self.step)

    @property
    def boundary_step(self) -> int:
        return self.step if self.step is not None else self.window_size


@dataclass(frozen=True)
class TrendChangeOptions:
    window_size: int = field(default_factory=lambda: settings.trend_window_size)
    trend_threshold: float = field(default_factory=lambda: settings.trend_threshold)
    volatility_threshold: float = field(default_factory=lambda: settings.trend_volatility_threshold)
    level_shift_percent: float = field(default_factory=lambda: settings.trend_level_shift_percent)

    def validate(self) -> None:
        require_window("window_size", self.window_size)
        if self.window_size < 2:
            raise InvalidConfigurationError("window_size must be at least 2 to fit a trend")
        require_positive("trend_threshold", self.trend_threshold)
        require_positive("volatility_threshold", self.volatility_threshold)
        require_positive("level_shift_percent", self.level_shift_percent)


@dataclass(frozen=True)
class AdvancedOptions:
    statistical_threshold: float = field(default_factory=lambda: settings.advanced_statistical_threshold)
    iqr_multiplier: float = field(default_factory=lambda: settings.advanced_iqr_multiplier)
    enable_trend_analysis: bool = True
    window_size: int = field(default_factory=lambda: settings.advanced_window_size)
    enable_seasonal_analysis: bool = False

    def validate(self) -> None:
        require_positive("statistical_threshold", self.statistical_threshold)
        require_positive("iqr_multiplier", self.iqr_multiplier)
        require_window("window_size", self.window_size)
        if self.enable_trend_analysis and self.window_size < 2:
            raise InvalidConfigurationError("window_size must be at least 2 for trend analysis")


@dataclass(frozen=True)
class DeviationAnalysisOptions:
    zscore_threshold: float = field(default_factory=lambda: settings.analysis_zscore_threshold)
    modified_zscore_threshold: float = field(default_factory=lambda: settings.analysis_modified_zscore_threshold)
    grubbs_alpha: float = field(default_factory=lambda: settings.grubbs_alpha)
    dixon_confidence: float = field(default_factory=lambda: settings.dixon_confidence)

    def validate(self) -> None:
        from config import DIXON_CRITICAL_VALUES

        require_positive("zscore_threshold", self.zscore_threshold)
        require_positive("modified_zscore_threshold", self.modified_zscore_threshold)
        require_positive("grubbs_alpha", self.grubbs_alpha)
        if self.grubbs_alpha >= 1.0:
            raise InvalidConfigurationError(f"grubbs_alpha must be below 1, got {self.grubbs_alpha!r}")
        if self.dixon_confidence not in DIXON_CRITICAL_VALUES:
            raise InvalidConfigurationError(
                f"dixon_confidence must be one of {sorted(DIXON_CRITICAL_VALUES)}, got {self.dixon_confidence!r}"
            )


@dataclass(frozen=True)
class FlagThresholds:
    statistical_deviation: float = field(default_factory=lambda: settings.flag_statistical_deviation)
    iqr_multiplier: float = field(default_factory=lambda: settings.iqr_multiplier)
    trend_sensitivity: float = field(default_factory=lambda: settings.flag_trend_sensitivity)
    pattern_sensitivity: float = field(default_factory=lambda: settings.flag_pattern_sensitivity)
    min_change_percent: float = field(default_factory=lambda: settings.pattern_min_change_percent)
    enable_advanced: bool = True
    enable_seasonal: bool = False
    enable_pattern_detection: bool = True
    enable_trend_detection: bool = True
    window_size: int = field(default_factory=lambda: settings.flag_window_size)

    def validate(self) -> None:
        require_positive("statistical_deviation", self.statistical_deviation)
        require_positive("iqr_multiplier", self.iqr_multiplier)
        require_positive("trend_sensitivity", self.trend_sensitivity)
        require_positive("pattern_sensitivity", self.pattern_sensitivity)
        require_window("window_size", self.window_size)
        if self.window_size < 2:
            raise InvalidConfigurationError("window_size must be at least 2 to compare trends")
        if self.min_change_percent < 0:
            raise InvalidConfigurationError(
                f"min_change_percent must not be negative, got {self.min_change_percent!r}"
            )
