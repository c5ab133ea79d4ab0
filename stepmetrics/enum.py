"""
Enumerations for Step Metrics.
"""

from enum import Enum
from .constants import (
    METRIC_KIND_COUNTER,
    METRIC_KIND_DISTRIBUTION,
    METRIC_KIND_GAUGE,
    RESULTS_ATTEMPTED_ONLY,
    RESULTS_ATTEMPTED_AND_COMMITTED,
    URN_USER_SUM_INT64,
    URN_USER_DISTRIBUTION_INT64,
    URN_USER_LATEST_INT64,
    URN_ELEMENT_COUNT,
    URN_SAMPLED_BYTE_SIZE,
)


class MetricKind(str, Enum):
    """Kind of metric a cell accumulates."""
    COUNTER = METRIC_KIND_COUNTER
    DISTRIBUTION = METRIC_KIND_DISTRIBUTION
    GAUGE = METRIC_KIND_GAUGE


class ResultsKind(str, Enum):
    """Which views a query result can answer."""
    ATTEMPTED_ONLY = RESULTS_ATTEMPTED_ONLY
    ATTEMPTED_AND_COMMITTED = RESULTS_ATTEMPTED_AND_COMMITTED


class DescriptorType(str, Enum):
    """Wire-level type indicator of a descriptor record."""
    USER_SUM_INT64 = URN_USER_SUM_INT64
    USER_DISTRIBUTION_INT64 = URN_USER_DISTRIBUTION_INT64
    USER_LATEST_INT64 = URN_USER_LATEST_INT64
    ELEMENT_COUNT = URN_ELEMENT_COUNT
    SAMPLED_BYTE_SIZE = URN_SAMPLED_BYTE_SIZE
