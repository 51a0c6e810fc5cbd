"""
Single-method outlier detectors for the Historian Anomaly Engine.

Each detector is a pure function of already validated, chronologically sorted
points (and, where needed, the shared :class:`StatisticalSummary`).  The
public entry points that validate input live in :mod:`engine.anomaly`.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.outliers.zscore import modified_zscore, zscore
from engine.outliers.grubbs import grubbs
from engine.outliers.dixon import dixon
from engine.outliers.iqr import iqr

__all__ = ["zscore", "modified_zscore", "grubbs", "dixon", "iqr"]
