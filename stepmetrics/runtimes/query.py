"""
Query Engine.

``MetricResults`` is one closed result-view type tagged by ResultsKind:

- ATTEMPTED_ONLY: results are built from a single registry and every
  committed outcome is CommittedUnsupported.
- ATTEMPTED_AND_COMMITTED: attempted and committed values come from two
  registries, combined with the same per-kind rules. A metric known to only
  one of them reports the identity element of its kind for the other.

Every query branches on the tag exhaustively.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..constants import DEFAULT_STEP_PATH_SEPARATOR
from ..enum import MetricKind, ResultsKind
from ..spec import (
    CommittedUnsupported,
    CommittedValue,
    MetricKey,
    MetricQueryResults,
    MetricResult,
    MetricsFilter,
    MetricValue,
)
from .combine import identity_for
from .registry import StepMetricsRegistry

_CollectedMetrics = Dict[Tuple[MetricKind, MetricKey], MetricValue]


def _collect(
    registry: StepMetricsRegistry,
    metrics_filter: MetricsFilter,
    separator: str,
) -> _CollectedMetrics:
    collected: _CollectedMetrics = {}
    for step, container in registry.containers():
        if not metrics_filter.matches_step(step, separator):
            continue
        for kind, name, value in container.snapshot().items():
            if metrics_filter.matches_name(name):
                collected[(kind, MetricKey(metric_name=name, step=step))] = value
    return collected


def _identity_like(kind: MetricKind, value: MetricValue) -> MetricValue:
    if kind is MetricKind.DISTRIBUTION:
        return identity_for(kind, value.percentile_targets)
    return identity_for(kind)


@dataclass(frozen=True, eq=False)
class MetricResults:
    """
    Queryable view over attempted (and possibly committed) metrics.

    Build it with as_attempted_only_results or as_metric_results rather
    than directly.

    Usage:
        results = as_attempted_only_results(registry)
        step_results = results.query_metrics(MetricsFilter(step="ParseRecords"))
        for counter in step_results.counters:
            print(counter.key, counter.attempted.value)
    """

    kind: ResultsKind
    attempted: StepMetricsRegistry
    committed: Optional[StepMetricsRegistry] = None
    step_separator: str = DEFAULT_STEP_PATH_SEPARATOR

    def __post_init__(self):
        has_committed = self.committed is not None
        assert has_committed == (self.kind is ResultsKind.ATTEMPTED_AND_COMMITTED), (
            f"{self.kind.value} results {'must not' if has_committed else 'need'} a committed registry"
        )

    @property
    def supports_committed(self) -> bool:
        return self.kind is ResultsKind.ATTEMPTED_AND_COMMITTED

    def query_metrics(self, metrics_filter: Optional[MetricsFilter] = None) -> MetricQueryResults:
        """
        Results matching a filter.

        An unset filter field matches everything. Unknown steps or names
        yield empty results. Result lists carry no ordering.
        """
        metrics_filter = metrics_filter or MetricsFilter()
        attempted = _collect(self.attempted, metrics_filter, self.step_separator)

        if self.kind is ResultsKind.ATTEMPTED_ONLY:
            unsupported = CommittedUnsupported()
            entries = {key: (value, unsupported) for key, value in attempted.items()}
        elif self.kind is ResultsKind.ATTEMPTED_AND_COMMITTED:
            committed = _collect(self.committed, metrics_filter, self.step_separator)
            entries = {}
            for key in attempted.keys() | committed.keys():
                kind = key[0]
                present = attempted[key] if key in attempted else committed[key]
                attempted_value = attempted.get(key, _identity_like(kind, present))
                committed_value = committed.get(key, _identity_like(kind, present))
                entries[key] = (attempted_value, CommittedValue(value=committed_value))
        else:
            raise AssertionError(f"Unhandled results kind: {self.kind}")

        results = MetricQueryResults()
        by_kind = {
            MetricKind.COUNTER: results.counters,
            MetricKind.DISTRIBUTION: results.distributions,
            MetricKind.GAUGE: results.gauges,
        }
        for (kind, key), (attempted_value, outcome) in entries.items():
            by_kind[kind].append(MetricResult(
                key=key,
                attempted=attempted_value,
                committed_outcome=outcome,
            ))
        return results

    def all_metrics(self) -> MetricQueryResults:
        return self.query_metrics(MetricsFilter())


def as_attempted_only_results(
    registry: StepMetricsRegistry,
    step_separator: str = DEFAULT_STEP_PATH_SEPARATOR,
) -> MetricResults:
    """Results for a backend that cannot report committed metrics."""
    return MetricResults(
        kind=ResultsKind.ATTEMPTED_ONLY,
        attempted=registry,
        step_separator=step_separator,
    )


def as_metric_results(
    attempted: StepMetricsRegistry,
    committed: StepMetricsRegistry,
    step_separator: str = DEFAULT_STEP_PATH_SEPARATOR,
) -> MetricResults:
    """Results carrying both attempted and committed values."""
    return MetricResults(
        kind=ResultsKind.ATTEMPTED_AND_COMMITTED,
        attempted=attempted,
        committed=committed,
        step_separator=step_separator,
    )
