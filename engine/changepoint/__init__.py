"""
Change point subpackage for the Historian Anomaly Engine.

This module re-exports the windowed pattern change detector from
:mod:`engine.changepoint.pattern` and the trend change detector from
:mod:`engine.changepoint.trend`, giving consumers a clean import path of
``engine.changepoint`` for window-to-window comparison utilities.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.changepoint.pattern import detect as detect_pattern_changes
from engine.changepoint.trend import detect as detect_significant_trend_changes

__all__ = ["detect_pattern_changes", "detect_significant_trend_changes"]
