"""
Metrics Exporter.

Renders query results as plain dictionaries or JSON for reporting tools.
Committed values a backend cannot supply are rendered as null.
"""

import json
from typing import Any, Dict, List

from ..constants import EXPORT_FORMAT_DICT, EXPORT_FORMAT_JSON
from ..enum import MetricKind
from ..interfaces import IMetricsExporter
from ..spec import MetricQueryResults, MetricResult, MetricValue


def render_value(kind: MetricKind, value: MetricValue) -> Any:
    """JSON-safe rendering of one value."""
    if kind is MetricKind.COUNTER:
        return value.value
    if kind is MetricKind.DISTRIBUTION:
        return {
            "sum": value.sum,
            "count": value.count,
            "min": value.min,
            "max": value.max,
            "mean": value.mean,
            "percentiles": {str(target): estimate for target, estimate in value.percentiles.items()},
        }
    if kind is MetricKind.GAUGE:
        return {
            "value": value.value,
            "timestamp": value.timestamp.isoformat() if value.timestamp else None,
        }
    raise AssertionError(f"Unhandled metric kind: {kind}")


class MetricsExporter(IMetricsExporter):
    """
    Exports metric query results.

    Usage:
        exporter = MetricsExporter()
        data = exporter.export(results.all_metrics())
        text = exporter.export(results.all_metrics(), format="json")
    """

    def export(self, results: MetricQueryResults, format: str = EXPORT_FORMAT_DICT) -> Any:
        data = {
            "counters": self._render_all(results.counters),
            "distributions": self._render_all(results.distributions),
            "gauges": self._render_all(results.gauges),
        }
        if format == EXPORT_FORMAT_DICT:
            return data
        if format == EXPORT_FORMAT_JSON:
            return json.dumps(data, sort_keys=True)
        raise ValueError(f"Unsupported export format: {format}")

    def _render_all(self, results: List[MetricResult]) -> List[Dict[str, Any]]:
        return [self._render(result) for result in results]

    def _render(self, result: MetricResult) -> Dict[str, Any]:
        kind = result.kind
        outcome = result.committed_outcome
        return {
            "namespace": result.name.namespace,
            "name": result.name.name,
            "step": result.step,
            "attempted": render_value(kind, result.attempted),
            "committed": render_value(kind, outcome.unwrap()) if outcome.is_supported else None,
        }
