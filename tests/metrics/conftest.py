"""
Shared fixtures for the metrics tests.
"""

import pytest

from stepmetrics import MetricContainer, MetricName


NAMESPACE = "stepmetrics.tests"
STEP1 = "myStep1"
STEP2 = "myStep2"
COUNTER_NAME = "myCounter"
DISTRIBUTION_NAME1 = "myDistribution1"
DISTRIBUTION_NAME2 = "myDistribution2"
GAUGE_NAME = "myGauge"

VALUE = 100


@pytest.fixture
def worker_container() -> MetricContainer:
    """A worker container with one metric of every kind recorded."""
    container = MetricContainer()
    container.get_counter(MetricName.named(NAMESPACE, COUNTER_NAME)).inc(VALUE)

    distribution1 = container.get_distribution(MetricName.named(NAMESPACE, DISTRIBUTION_NAME1))
    distribution2 = container.get_distribution(
        MetricName.named(NAMESPACE, DISTRIBUTION_NAME2),
        percentile_targets=[90.0, 99.0],
    )
    for sample in (VALUE, VALUE * 2, VALUE * 3):
        distribution1.update(sample)
        distribution2.update(sample)

    container.get_gauge(MetricName.named(NAMESPACE, GAUGE_NAME)).set(VALUE)
    return container
