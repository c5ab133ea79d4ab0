"""
Descriptor Emitter.

Converts container snapshots into wire-level descriptor records for the
control plane. Emission is a pure read.

Unbound metrics are dropped unless they are reserved system counters, which
are reported without a step label. Empty gauges carry no value and are
skipped. Output order is unspecified.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..constants import (
    LABEL_NAME,
    LABEL_NAMESPACE,
    LABEL_STEP,
    RESERVED_SYSTEM_METRICS,
    SYSTEM_NAMESPACE,
)
from ..enum import DescriptorType, MetricKind
from ..spec import DescriptorRecord, MetricName, MetricValue

if TYPE_CHECKING:
    from .container import ContainerSnapshot
    from .registry import StepMetricsRegistry


USER_DESCRIPTOR_TYPES: Dict[MetricKind, DescriptorType] = {
    MetricKind.COUNTER: DescriptorType.USER_SUM_INT64,
    MetricKind.DISTRIBUTION: DescriptorType.USER_DISTRIBUTION_INT64,
    MetricKind.GAUGE: DescriptorType.USER_LATEST_INT64,
}


def system_descriptor_type(name: MetricName) -> Optional[DescriptorType]:
    """Descriptor type of a reserved system metric, None for user metrics."""
    if name.namespace != SYSTEM_NAMESPACE:
        return None
    urn = RESERVED_SYSTEM_METRICS.get(name.name)
    return DescriptorType(urn) if urn else None


def wire_value(kind: MetricKind, value: MetricValue) -> Any:
    if kind is MetricKind.COUNTER:
        return value.value
    if kind is MetricKind.DISTRIBUTION:
        return {
            "sum": value.sum,
            "count": value.count,
            "min": value.min,
            "max": value.max,
        }
    if kind is MetricKind.GAUGE:
        return {"value": value.value, "timestamp": value.timestamp}
    raise AssertionError(f"Unhandled metric kind: {kind}")


def build_descriptor(
    kind: MetricKind,
    name: MetricName,
    value: MetricValue,
    step: Optional[str],
) -> Optional[DescriptorRecord]:
    """Descriptor for one cell, or None when the cell is not reported."""
    if kind is MetricKind.GAUGE and value.is_empty:
        return None
    # Reserved URNs apply to counters only
    system_type = system_descriptor_type(name) if kind is MetricKind.COUNTER else None
    if step is None and system_type is None:
        return None

    labels = {LABEL_NAMESPACE: name.namespace, LABEL_NAME: name.name}
    if step is not None:
        labels[LABEL_STEP] = step
    return DescriptorRecord(
        type=system_type or USER_DESCRIPTOR_TYPES[kind],
        labels=labels,
        value=wire_value(kind, value),
    )


def snapshot_descriptors(snapshot: "ContainerSnapshot") -> List[DescriptorRecord]:
    records = []
    for kind, name, value in snapshot.items():
        record = build_descriptor(kind, name, value, snapshot.step)
        if record is not None:
            records.append(record)
    return records


class DescriptorEmitter:
    """
    Polling surface for the control plane.

    Usage:
        emitter = DescriptorEmitter(registry)
        for record in emitter.poll():
            send(record.to_wire())
    """

    def __init__(self, registry: "StepMetricsRegistry"):
        self._registry = registry

    def poll(self) -> List[DescriptorRecord]:
        return self._registry.get_descriptors()

    def poll_wire(self) -> List[Dict[str, Any]]:
        return [record.to_wire() for record in self.poll()]
