"""
Combine Operators.

Pure merge and identity definitions for every metric kind.

- Counter: addition. Total, commutative, associative.
- Distribution: sum of sums, sum of counts, min of mins, max of maxes,
  union of percentile targets, bucket-wise sum of histograms. Total,
  commutative, associative.
- Gauge: keeps the operand with the later timestamp; on equal timestamps
  the right operand (the one applied last) wins. Associative but not
  commutative.

Operators never raise on valid values; assertions guard the invariants.
A counter or distribution sum overflowing int64 is rejected by the value
model with a pydantic ValidationError.
"""

from typing import Callable, Dict, Iterable

from ..enum import MetricKind
from ..spec import CounterValue, DistributionValue, GaugeValue, MetricValue
from ..spec.metric_values import merge_histograms


def combine_counters(left: CounterValue, right: CounterValue) -> CounterValue:
    return CounterValue(value=left.value + right.value)


def combine_distributions(left: DistributionValue, right: DistributionValue) -> DistributionValue:
    assert left.count >= 0 and right.count >= 0, "distribution count must not be negative"
    return DistributionValue(
        sum=left.sum + right.sum,
        count=left.count + right.count,
        min=min(left.min, right.min),
        max=max(left.max, right.max),
        percentile_targets=left.percentile_targets | right.percentile_targets,
        buckets=merge_histograms(left.buckets, right.buckets),
    )


def combine_gauges(left: GaugeValue, right: GaugeValue) -> GaugeValue:
    if right.is_empty:
        return left
    if left.is_empty:
        return right
    if right.timestamp >= left.timestamp:
        return right
    return left


COMBINERS: Dict[MetricKind, Callable[[MetricValue, MetricValue], MetricValue]] = {
    MetricKind.COUNTER: combine_counters,
    MetricKind.DISTRIBUTION: combine_distributions,
    MetricKind.GAUGE: combine_gauges,
}


def combine(left: MetricValue, right: MetricValue) -> MetricValue:
    """Combine two values of the same kind."""
    assert left.kind == right.kind, f"cannot combine {left.kind} with {right.kind}"
    return COMBINERS[MetricKind(left.kind)](left, right)


def identity_for(kind: MetricKind, percentile_targets: Iterable[float] = ()) -> MetricValue:
    """Identity element of a kind."""
    if kind is MetricKind.COUNTER:
        return CounterValue.identity()
    if kind is MetricKind.DISTRIBUTION:
        return DistributionValue.identity(percentile_targets)
    if kind is MetricKind.GAUGE:
        return GaugeValue.empty()
    raise AssertionError(f"Unhandled metric kind: {kind}")


def combine_all(kind: MetricKind, values: Iterable[MetricValue]) -> MetricValue:
    """Fold values left to right starting from the identity of kind."""
    result = identity_for(kind)
    for value in values:
        result = combine(result, value)
    return result
