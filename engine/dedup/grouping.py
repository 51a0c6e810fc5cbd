"""
Deduplication of anomaly records produced by several detectors: records sharing a (timestamp, value) key collapse into the most severe one, and the survivors are returned in chronological order.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from api.responses import AnomalyRecord


@dataclass
class AnomalyGroup:
    representative: AnomalyRecord
    members: List[AnomalyRecord] = field(default_factory=list)


def _key(anomaly: AnomalyRecord) -> Tuple[datetime, float]:
    return anomaly.timestamp, anomaly.value


def group_anomalies(anomalies: Iterable[AnomalyRecord]) -> List[AnomalyGroup]:
    groups: Dict[Tuple[datetime, float], AnomalyGroup] = {}
    for a in anomalies:
        key = _key(a)
        current = groups.get(key)
        if current is None:
            groups[key] = AnomalyGroup(representative=a, members=[a])
            continue
        current.members.append(a)
        # first record wins ties so earlier detectors keep their description
        if a.severity.weight() > current.representative.severity.weight():
            current.representative = a
    return list(groups.values())


def deduplicate(anomalies: Iterable[AnomalyRecord]) -> List[AnomalyRecord]:
    unique = [g.representative for g in group_anomalies(anomalies)]
    return sorted(unique, key=lambda a: a.timestamp)
