"""
Statistics subpackage for the Historian Anomaly Engine.

Re-exports the summary calculator shared by every detector together with the
descriptive helpers (basic statistics, trend line, moving average, percentage
change and data quality) used when building tag reports.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.statistics.summary import quartiles, summarize
from engine.statistics.descriptive import BasicStatistics, calculate_statistics
from engine.statistics.trend import (
    TrendLine,
    calculate_moving_average,
    calculate_percentage_change,
    calculate_trend_line,
)
from engine.statistics.quality import DataQualityReport, calculate_data_quality

__all__ = [
    "quartiles",
    "summarize",
    "BasicStatistics",
    "calculate_statistics",
    "TrendLine",
    "calculate_moving_average",
    "calculate_percentage_change",
    "calculate_trend_line",
    "DataQualityReport",
    "calculate_data_quality",
]
