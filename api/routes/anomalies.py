"""
Anomaly routes: statistical deviation, multi-algorithm detection, pattern and trend changes, per-method outlier comparison and comprehensive flagging over posted historian points.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from api.routes.common import to_options
from api.routes.exception import handle_exceptions
from engine.anomaly import (
    detect_advanced_anomalies,
    detect_anomalies,
    flag_anomalies,
    perform_statistical_deviation_analysis,
)
from engine.changepoint import detect_pattern_changes, detect_significant_trend_changes
from engine.options import (
    AdvancedOptions,
    DeviationAnalysisOptions,
    FlagThresholds,
    PatternChangeOptions,
    TrendChangeOptions,
)
from api.requests import (
    AdvancedAnomalyRequest,
    DeviationAnalysisRequest,
    FlagRequest,
    PatternChangeRequest,
    StatisticalAnomalyRequest,
    TrendChangeRequest,
)
from api.responses import AnomalyRecord, FlagResult, MethodResult

router = APIRouter(prefix="/anomalies", tags=["Anomalies"])


@router.post("/statistical", response_model=List[AnomalyRecord], summary="Z-score deviation from the series mean")
@handle_exceptions
async def statistical_anomalies(req: StatisticalAnomalyRequest) -> List[AnomalyRecord]:
    return detect_anomalies(req.points, req.threshold)


@router.post("/advanced", response_model=List[AnomalyRecord], summary="Combined z-score, IQR, trend and seasonal detection")
@handle_exceptions
async def advanced_anomalies(req: AdvancedAnomalyRequest) -> List[AnomalyRecord]:
    return detect_advanced_anomalies(req.points, to_options(req, AdvancedOptions))


@router.post("/pattern-changes", response_model=List[AnomalyRecord], summary="Mean shifts between adjacent windows")
@handle_exceptions
async def pattern_changes(req: PatternChangeRequest) -> List[AnomalyRecord]:
    return detect_pattern_changes(req.points, to_options(req, PatternChangeOptions))


@router.post("/trend-changes", response_model=List[AnomalyRecord], summary="Slope, volatility and level changes between windows")
@handle_exceptions
async def trend_changes(req: TrendChangeRequest) -> List[AnomalyRecord]:
    return detect_significant_trend_changes(req.points, to_options(req, TrendChangeOptions))


@router.post("/deviation-analysis", response_model=List[MethodResult], summary="Side-by-side classical outlier tests")
@handle_exceptions
async def deviation_analysis(req: DeviationAnalysisRequest) -> List[MethodResult]:
    return perform_statistical_deviation_analysis(
        req.points, req.methods, to_options(req, DeviationAnalysisOptions)
    )


@router.post("/flag", response_model=FlagResult, summary="Run every applicable detector and summarize")
@handle_exceptions
async def flag(req: FlagRequest) -> FlagResult:
    return flag_anomalies(req.points, to_options(req, FlagThresholds))
