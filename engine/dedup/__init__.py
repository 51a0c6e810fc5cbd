from engine.dedup.grouping import AnomalyGroup, deduplicate, group_anomalies

__all__ = ["AnomalyGroup", "deduplicate", "group_anomalies"]
