"""
Metric Container.

Per-scope accumulator holding one cell per distinct metric name for each
metric kind. A container is scoped to a single step, or to the unbound
scope when ``step`` is None.

The container lock guards only the cell dictionaries: it is held for one
get-or-create or while copying the cell lists, never while a cell is
updated. Whole-container operations (update, reset, snapshot) are therefore
not atomic across cells; a concurrent reader may see a partially merged
container.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..constants import LOG_CONTAINER_MERGED, LOG_PERCENTILE_MISMATCH
from ..enum import MetricKind
from ..spec import (
    CounterValue,
    DescriptorRecord,
    DistributionValue,
    GaugeValue,
    MetricName,
    MetricValue,
)
from .cells import BaseCell, CounterCell, DistributionCell, GaugeCell
from .descriptors import snapshot_descriptors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerSnapshot:
    """Immutable point-in-time copy of a container's values."""

    step: Optional[str]
    counters: Mapping[MetricName, CounterValue]
    distributions: Mapping[MetricName, DistributionValue]
    gauges: Mapping[MetricName, GaugeValue]

    def items(self) -> Iterator[Tuple[MetricKind, MetricName, MetricValue]]:
        """Every (kind, name, value) held by the snapshot."""
        for name, value in self.counters.items():
            yield MetricKind.COUNTER, name, value
        for name, value in self.distributions.items():
            yield MetricKind.DISTRIBUTION, name, value
        for name, value in self.gauges.items():
            yield MetricKind.GAUGE, name, value

    @property
    def cell_count(self) -> int:
        return len(self.counters) + len(self.distributions) + len(self.gauges)

    def __hash__(self) -> int:
        return hash((
            self.step,
            frozenset(self.counters.items()),
            frozenset(self.distributions.items()),
            frozenset(self.gauges.items()),
        ))


class MetricContainer:
    """
    Mutable accumulator of counters, distributions and gauges for one scope.

    Cells are created lazily on first access and never removed. A container
    is usually owned by one worker while it runs and then merged into a
    StepMetricsRegistry with ``registry.update(step, container)``.

    Usage:
        container = MetricContainer("ParseRecords")
        container.get_counter(MetricName.named("io", "records")).inc(3)
        container.get_distribution(
            MetricName.named("io", "record_bytes"), percentile_targets=[50, 99]
        ).update(512)
        container.get_gauge(MetricName.named("io", "backlog")).set(42)
    """

    def __init__(self, step: Optional[str] = None):
        self._step = step
        self._lock = threading.Lock()
        self._counters: Dict[MetricName, CounterCell] = {}
        self._distributions: Dict[MetricName, DistributionCell] = {}
        self._gauges: Dict[MetricName, GaugeCell] = {}

    @classmethod
    def unbound(cls) -> "MetricContainer":
        """Container for metrics not attributed to any step."""
        return cls(None)

    @property
    def step(self) -> Optional[str]:
        return self._step

    @property
    def is_bound(self) -> bool:
        return self._step is not None

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def get_counter(self, name: MetricName) -> CounterCell:
        cell = self._counters.get(name)
        if cell is None:
            with self._lock:
                cell = self._counters.get(name)
                if cell is None:
                    cell = self._counters[name] = CounterCell(name)
        return cell

    def get_distribution(
        self,
        name: MetricName,
        percentile_targets: Iterable[float] = (),
    ) -> DistributionCell:
        """
        Get or create a distribution cell.

        Percentile targets are fixed when the cell is created; asking again
        with different targets returns the existing cell unchanged.
        """
        targets = frozenset(percentile_targets)
        cell = self._distribution_cell(name, targets)
        if targets and targets != cell.percentile_targets:
            logger.warning(LOG_PERCENTILE_MISMATCH.format(
                name=name,
                existing=sorted(cell.percentile_targets),
                requested=sorted(targets),
            ))
        return cell

    def _distribution_cell(self, name: MetricName, targets: frozenset) -> DistributionCell:
        cell = self._distributions.get(name)
        if cell is None:
            with self._lock:
                cell = self._distributions.get(name)
                if cell is None:
                    cell = self._distributions[name] = DistributionCell(name, targets)
        return cell

    def get_gauge(self, name: MetricName) -> GaugeCell:
        cell = self._gauges.get(name)
        if cell is None:
            with self._lock:
                cell = self._gauges.get(name)
                if cell is None:
                    cell = self._gauges[name] = GaugeCell(name)
        return cell

    def get_cell(self, kind: MetricKind, name: MetricName, percentile_targets: Iterable[float] = ()) -> BaseCell:
        """Get or create the cell of a kind."""
        if kind is MetricKind.COUNTER:
            return self.get_counter(name)
        if kind is MetricKind.DISTRIBUTION:
            return self.get_distribution(name, percentile_targets)
        if kind is MetricKind.GAUGE:
            return self.get_gauge(name)
        raise AssertionError(f"Unhandled metric kind: {kind}")

    def _all_cells(self) -> List[BaseCell]:
        with self._lock:
            return [
                *self._counters.values(),
                *self._distributions.values(),
                *self._gauges.values(),
            ]

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def update(self, source: Union["MetricContainer", ContainerSnapshot]) -> None:
        """
        Merge every cell of source into the matching cell of this container.

        Missing cells are created. The source is only read, so its owner may
        keep using or discard it afterwards.
        """
        snapshot = source.snapshot() if isinstance(source, MetricContainer) else source
        for kind, name, value in snapshot.items():
            if kind is MetricKind.DISTRIBUTION:
                # Differing targets merge to their union
                self._distribution_cell(name, value.percentile_targets).merge(value)
            else:
                self.get_cell(kind, name).merge(value)
        logger.debug(LOG_CONTAINER_MERGED.format(cells=snapshot.cell_count, step=self._step))

    def reset(self) -> None:
        """Drive every cell back to its identity element."""
        for cell in self._all_cells():
            cell.reset()

    def snapshot(self) -> ContainerSnapshot:
        with self._lock:
            counters = list(self._counters.items())
            distributions = list(self._distributions.items())
            gauges = list(self._gauges.items())
        return ContainerSnapshot(
            step=self._step,
            counters=MappingProxyType({name: cell.value for name, cell in counters}),
            distributions=MappingProxyType({name: cell.value for name, cell in distributions}),
            gauges=MappingProxyType({name: cell.value for name, cell in gauges}),
        )

    def emit_descriptors(self) -> List[DescriptorRecord]:
        """Descriptor records for this container's cells."""
        return snapshot_descriptors(self.snapshot())

    # -------------------------------------------------------------------------
    # Equality
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricContainer):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __hash__(self) -> int:
        return hash(self.snapshot())

    def __repr__(self) -> str:
        return f"MetricContainer(step={self._step!r}, cells={self.snapshot().cell_count})"
