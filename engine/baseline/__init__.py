"""
Seasonal baseline logic grouping samples by hour of day, used by the advanced detector to flag values that break a tag's daily cycle.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.baseline.seasonal import HourBaseline, detect as detect_seasonal_anomalies, hourly_baselines

__all__ = ["HourBaseline", "detect_seasonal_anomalies", "hourly_baselines"]
