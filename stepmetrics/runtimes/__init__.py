"""
Runtime implementations for Step Metrics.

This module provides:
- Combine operators and identities per metric kind
- Metric cells, containers and the step registry
- The query engine with attempted-only and attempted+committed views
- Descriptor emission for the control plane
- Export and factory helpers
"""

from .combine import (
    combine,
    combine_all,
    combine_counters,
    combine_distributions,
    combine_gauges,
    identity_for,
)
from .cells import BaseCell, CounterCell, DistributionCell, GaugeCell
from .container import ContainerSnapshot, MetricContainer
from .registry import StepMetricsRegistry
from .query import MetricResults, as_attempted_only_results, as_metric_results
from .descriptors import DescriptorEmitter
from .exporter import MetricsExporter
from .factory import create_registry, create_metric_results, resolve_options

__all__ = [
    "combine",
    "combine_all",
    "combine_counters",
    "combine_distributions",
    "combine_gauges",
    "identity_for",
    "BaseCell",
    "CounterCell",
    "DistributionCell",
    "GaugeCell",
    "ContainerSnapshot",
    "MetricContainer",
    "StepMetricsRegistry",
    "MetricResults",
    "as_attempted_only_results",
    "as_metric_results",
    "DescriptorEmitter",
    "MetricsExporter",
    "create_registry",
    "create_metric_results",
    "resolve_options",
]
