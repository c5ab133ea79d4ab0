"""
Interfaces for Step Metrics.

Defines the protocols implemented by metric cells and result exporters.
All operations are synchronous; none suspend.
"""

from typing import Any, Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .spec import MetricName, MetricQueryResults, MetricValue


@runtime_checkable
class IMetricCell(Protocol):
    """
    Interface for a single metric cell.

    A cell starts at the identity element of its kind and folds every
    update in with that kind's combine operator, atomically per update.

    Example:
        cell = container.get_counter(MetricName.named("io", "records"))
        cell.merge(CounterValue.of(5))
        cell.value.value  # 5
    """

    @property
    def name(self) -> 'MetricName':
        """Name of the metric held by this cell."""
        ...

    @property
    def value(self) -> 'MetricValue':
        """Current immutable value."""
        ...

    def merge(self, value: 'MetricValue') -> None:
        """
        Combine a value of the same kind into the cell.

        Args:
            value: Value to fold in
        """
        ...

    def reset(self) -> None:
        """Return the cell to its identity element."""
        ...


@runtime_checkable
class IMetricsExporter(Protocol):
    """
    Interface for Metrics Export.

    Exports query results in various formats for reporting tools.

    Example:
        exporter = MetricsExporter()
        json_data = exporter.export(results.all_metrics(), format="json")
    """

    def export(
        self,
        results: 'MetricQueryResults',
        format: str = "dict",
    ) -> Any:
        """
        Export query results.

        Args:
            results: Results to export
            format: Export format ("dict" or "json")

        Returns:
            Exported data in requested format
        """
        ...
