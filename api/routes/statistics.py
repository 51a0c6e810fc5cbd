"""
Descriptive statistics routes: basic statistics with a data quality report, and least-squares trend line with an optional moving average.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from fastapi import APIRouter

from api.routes.exception import handle_exceptions
from engine.statistics import (
    calculate_data_quality,
    calculate_moving_average,
    calculate_statistics,
    calculate_trend_line,
)
from api.requests import PointsRequest, TrendLineRequest

router = APIRouter(prefix="/statistics", tags=["Statistics"])


@router.post("", summary="Basic statistics and data quality for a tag")
@handle_exceptions
async def statistics(req: PointsRequest) -> Dict[str, Any]:
    return {
        "statistics": asdict(calculate_statistics(req.points)),
        "data_quality": asdict(calculate_data_quality(req.points)),
    }


@router.post("/trend", summary="Trend line and moving average for a tag")
@handle_exceptions
async def trend(req: TrendLineRequest) -> Dict[str, Any]:
    line = calculate_trend_line(req.points)
    averaged = (
        calculate_moving_average(req.points, req.window_size)
        if req.window_size is not None
        else []
    )
    return {
        "trend_line": asdict(line),
        "moving_average": [p.model_dump(mode="json", by_alias=True) for p in averaged],
    }
