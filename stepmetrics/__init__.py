"""
Step Metrics.

Aggregation and query engine for per-step pipeline metrics.

Worker tasks record counters, distributions and gauges into a
MetricContainer handed to them by the runtime. Containers are folded into
a StepMetricsRegistry per step, registries are folded into each other, and
reporting tools query the result through an attempted-only or an
attempted+committed view.

Features:
=========
- Well-defined combine operators and identity elements per metric kind
- Thread-safe cells, lazily created containers and registries
- Approximate, merge-order independent percentile estimates
- Filtered queries over attempted and committed views
- Wire-level descriptor records for a control plane

Usage:
======
    from stepmetrics import (
        MetricContainer,
        MetricName,
        MetricsFilter,
        StepMetricsRegistry,
        as_attempted_only_results,
    )

    container = MetricContainer()
    container.get_counter(MetricName.named("io", "records")).inc(100)

    registry = StepMetricsRegistry()
    registry.update("ReadRecords", container)

    results = as_attempted_only_results(registry)
    step_results = results.query_metrics(MetricsFilter(step="ReadRecords"))
    print(step_results.counters[0].attempted.value)  # 100
"""

from .constants import (
    COMMITTED_METRICS_UNSUPPORTED_MESSAGE,
    ELEMENT_COUNT_METRIC,
    INT64_MAX,
    INT64_MIN,
    RESERVED_SYSTEM_METRICS,
    SAMPLED_BYTE_SIZE_METRIC,
    SYSTEM_NAMESPACE,
)

from .enum import (
    MetricKind,
    ResultsKind,
    DescriptorType,
)

from .exceptions import (
    MetricsError,
    CommittedMetricsUnsupportedError,
    MissingConfigurationError,
)

from .interfaces import (
    IMetricCell,
    IMetricsExporter,
)

from .spec import (
    MetricName,
    MetricKey,
    MetricsFilter,
    CounterValue,
    DistributionValue,
    GaugeValue,
    MetricValue,
    CommittedValue,
    CommittedUnsupported,
    MetricResult,
    MetricQueryResults,
    DescriptorRecord,
)

from .runtimes import (
    combine,
    combine_all,
    combine_counters,
    combine_distributions,
    combine_gauges,
    identity_for,
    CounterCell,
    DistributionCell,
    GaugeCell,
    ContainerSnapshot,
    MetricContainer,
    StepMetricsRegistry,
    MetricResults,
    as_attempted_only_results,
    as_metric_results,
    DescriptorEmitter,
    MetricsExporter,
    create_registry,
    create_metric_results,
)

from .config import MetricsSettings, get_settings

__all__ = [
    # Constants
    "COMMITTED_METRICS_UNSUPPORTED_MESSAGE",
    "ELEMENT_COUNT_METRIC",
    "INT64_MAX",
    "INT64_MIN",
    "RESERVED_SYSTEM_METRICS",
    "SAMPLED_BYTE_SIZE_METRIC",
    "SYSTEM_NAMESPACE",
    # Enums
    "MetricKind",
    "ResultsKind",
    "DescriptorType",
    # Exceptions
    "MetricsError",
    "CommittedMetricsUnsupportedError",
    "MissingConfigurationError",
    # Interfaces
    "IMetricCell",
    "IMetricsExporter",
    # Models
    "MetricName",
    "MetricKey",
    "MetricsFilter",
    "CounterValue",
    "DistributionValue",
    "GaugeValue",
    "MetricValue",
    "CommittedValue",
    "CommittedUnsupported",
    "MetricResult",
    "MetricQueryResults",
    "DescriptorRecord",
    # Runtimes
    "combine",
    "combine_all",
    "combine_counters",
    "combine_distributions",
    "combine_gauges",
    "identity_for",
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
    # Config
    "MetricsSettings",
    "get_settings",
]
