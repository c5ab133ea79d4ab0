"""
Metric Cells.

A cell owns the running value of one metric in one container. Every
mutation is a single combine applied under the cell's own lock, so
concurrent increments from many worker threads are never lost. No cell
lock is ever held while another lock is taken.
"""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

from ..enum import MetricKind
from ..spec import CounterValue, DistributionValue, GaugeValue, MetricName, MetricValue
from .combine import combine


class BaseCell(ABC):
    """
    Abstract base class for metric cells.

    Holds the current value, starting at the identity element of the
    cell's kind, and folds updates into it with the kind's combine operator.
    """

    kind: MetricKind

    def __init__(self, name: MetricName):
        self._name = name
        self._lock = threading.Lock()
        self._value = self._identity()

    @abstractmethod
    def _identity(self) -> MetricValue:
        """Identity element this cell starts from and resets to."""
        ...

    @property
    def name(self) -> MetricName:
        return self._name

    @property
    def value(self) -> MetricValue:
        """Current value. Values are immutable, so no copy is needed."""
        return self._value

    @property
    def is_identity(self) -> bool:
        return self._value.is_identity

    def merge(self, value: MetricValue) -> None:
        """Combine a value of the same kind into this cell."""
        with self._lock:
            self._value = combine(self._value, value)

    def reset(self) -> None:
        with self._lock:
            self._value = self._identity()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name}, {self._value!r})"


class CounterCell(BaseCell):
    """Running int64 sum."""

    kind = MetricKind.COUNTER

    def _identity(self) -> CounterValue:
        return CounterValue.identity()

    def inc(self, n: int = 1) -> None:
        self.merge(CounterValue.of(n))

    def dec(self, n: int = 1) -> None:
        self.merge(CounterValue.of(-n))


class DistributionCell(BaseCell):
    """Distribution of int64 samples with percentile targets fixed at creation."""

    kind = MetricKind.DISTRIBUTION

    def __init__(self, name: MetricName, percentile_targets: Iterable[float] = ()):
        self._percentile_targets = frozenset(percentile_targets)
        super().__init__(name)

    @property
    def percentile_targets(self) -> FrozenSet[float]:
        return self._percentile_targets

    def _identity(self) -> DistributionValue:
        return DistributionValue.identity(self._percentile_targets)

    def update(self, sample: int) -> None:
        """Record one sample."""
        self.merge(DistributionValue.of(sample, self._percentile_targets))


class GaugeCell(BaseCell):
    """Latest value wins, by observation timestamp."""

    kind = MetricKind.GAUGE

    def _identity(self) -> GaugeValue:
        return GaugeValue.empty()

    def set(self, value: int, timestamp: Optional[datetime] = None) -> None:
        """Record an observation; timestamp defaults to now (UTC)."""
        self.merge(GaugeValue.of(value, timestamp))
