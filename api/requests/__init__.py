from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from engine.enums import Quality


class TimeSeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: datetime
    value: float
    quality: Quality = Quality.good
    tag_name: str = Field(default="", alias="tagName")

    @field_validator("quality", mode="before")
    @classmethod
    def _coerce_quality(cls, raw: Any) -> Any:
        # historians report OPC-style integer codes; names are accepted too
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int):
            return Quality.from_code(raw)
        if isinstance(raw, str):
            text = raw.strip().lower()
            if text.isdigit():
                return Quality.from_code(int(text))
            return text
        return raw


class PointsRequest(BaseModel):
    points: List[TimeSeriesPoint] = Field(default_factory=list)


class StatisticalAnomalyRequest(PointsRequest):
    threshold: Optional[float] = None


class AdvancedAnomalyRequest(PointsRequest):
    statistical_threshold: Optional[float] = None
    iqr_multiplier: Optional[float] = None
    enable_trend_analysis: bool = True
    enable_seasonal_analysis: bool = False
    window_size: Optional[int] = None


class PatternChangeRequest(PointsRequest):
    window_size: Optional[int] = None
    sensitivity_threshold: Optional[float] = None
    min_change_percent: Optional[float] = None
    step: Optional[int] = None


class TrendChangeRequest(PointsRequest):
    window_size: Optional[int] = None
    trend_threshold: Optional[float] = None
    volatility_threshold: Optional[float] = None
    level_shift_percent: Optional[float] = None


class DeviationAnalysisRequest(PointsRequest):
    methods: Optional[List[str]] = None
    zscore_threshold: Optional[float] = None
    modified_zscore_threshold: Optional[float] = None
    grubbs_alpha: Optional[float] = None
    dixon_confidence: Optional[float] = None


class FlagRequest(PointsRequest):
    statistical_deviation: Optional[float] = None
    iqr_multiplier: Optional[float] = None
    trend_sensitivity: Optional[float] = None
    pattern_sensitivity: Optional[float] = None
    min_change_percent: Optional[float] = None
    enable_advanced: bool = True
    enable_seasonal: bool = False
    enable_pattern_detection: bool = True
    enable_trend_detection: bool = True
    window_size: Optional[int] = None


class TrendLineRequest(PointsRequest):
    window_size: Optional[int] = Field(default=None, ge=1)
