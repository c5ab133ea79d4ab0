"""
Spec models for Step Metrics.

Provides data models for metric names, per-kind values, query results
and descriptor records.
"""

from .metric_name import (
    MetricName,
    MetricKey,
    MetricsFilter,
)
from .metric_values import (
    CounterValue,
    DistributionValue,
    GaugeValue,
    MetricValue,
    histogram_bucket,
)
from .results import (
    CommittedValue,
    CommittedUnsupported,
    CommittedOutcome,
    MetricResult,
    MetricQueryResults,
)
from .descriptors import DescriptorRecord

__all__ = [
    "MetricName",
    "MetricKey",
    "MetricsFilter",
    "CounterValue",
    "DistributionValue",
    "GaugeValue",
    "MetricValue",
    "histogram_bucket",
    "CommittedValue",
    "CommittedUnsupported",
    "CommittedOutcome",
    "MetricResult",
    "MetricQueryResults",
    "DescriptorRecord",
]
