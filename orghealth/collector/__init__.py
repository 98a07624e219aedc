"""Async metric collection from caller-supplied sources."""

from orghealth.collector.metric_collector import (
    MetricCollectionError,
    MetricCollector,
    MetricSource,
)

__all__ = [
    "MetricCollectionError",
    "MetricCollector",
    "MetricSource",
]
