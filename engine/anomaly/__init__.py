"""
Anomaly detection entry points for historian time series: statistical deviation, per-method outlier comparison, multi-algorithm detection and comprehensive flagging with summary counts.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.anomaly.advanced import detect as detect_advanced_anomalies
from engine.anomaly.detection import (
    detect_anomalies,
    flag_anomalies,
    perform_statistical_deviation_analysis,
    summarize_anomalies,
)

__all__ = [
    "detect_anomalies",
    "detect_advanced_anomalies",
    "perform_statistical_deviation_analysis",
    "flag_anomalies",
    "summarize_anomalies",
]
