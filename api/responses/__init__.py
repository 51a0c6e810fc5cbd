"""
Response models for API endpoints and internal data structures.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_serializer

from engine.enums import DetectionMethod, DetectionSource, Severity


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class AnomalyRecord(NpModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    value: float
    expected_value: float
    deviation: float = Field(gt=0.0)
    severity: Severity
    description: str


class StatisticalSummary(NpModel):
    model_config = ConfigDict(frozen=True)

    mean: float
    median: float
    standard_deviation: float = Field(ge=0.0)
    mad: float = Field(ge=0.0)


class MethodResult(NpModel):

    method: DetectionMethod
    anomalies: List[AnomalyRecord]
    statistics: StatisticalSummary


class AnomalySummary(NpModel):

    total_anomalies: int
    high_severity: int
    medium_severity: int
    low_severity: int
    anomaly_rate: float = Field(ge=0.0, le=100.0)
    detection_methods: List[DetectionSource] = Field(default_factory=list)


class FlagResult(NpModel):

    anomalies: List[AnomalyRecord]
    summary: AnomalySummary
