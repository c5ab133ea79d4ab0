"""
Tests for descriptor emission.

Tests user and reserved system metric records, label sets and wire form.
"""

from datetime import datetime, timezone

from stepmetrics import (
    ELEMENT_COUNT_METRIC,
    SAMPLED_BYTE_SIZE_METRIC,
    SYSTEM_NAMESPACE,
    DescriptorEmitter,
    DescriptorRecord,
    DescriptorType,
    MetricContainer,
    MetricName,
    StepMetricsRegistry,
)


T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def as_tuples(records):
    return sorted(
        (record.type.value, tuple(sorted(record.labels.items())), repr(record.value))
        for record in records
    )


# =============================================================================
# CONTAINER DESCRIPTOR TESTS
# =============================================================================

class TestContainerDescriptors:
    """Tests for MetricContainer.emit_descriptors."""

    def test_user_metric_dropped_when_unbound(self):
        """Test that unbound user metrics are never reported."""
        container = MetricContainer.unbound()
        container.get_counter(MetricName.named("ns", "name1")).inc(5)

        assert container.emit_descriptors() == []

    def test_system_metric_reported_when_unbound(self):
        """Test that reserved system metrics are reported without a step label."""
        container = MetricContainer.unbound()
        container.get_counter(MetricName.named(SYSTEM_NAMESPACE, SAMPLED_BYTE_SIZE_METRIC)).inc(64)

        [record] = container.emit_descriptors()

        assert record.type is DescriptorType.SAMPLED_BYTE_SIZE
        assert record.labels == {"namespace": SYSTEM_NAMESPACE, "name": SAMPLED_BYTE_SIZE_METRIC}
        assert record.value == 64

    def test_unknown_system_name_is_a_user_metric(self):
        """Test that only allow-listed system names bypass the unbound rule."""
        container = MetricContainer.unbound()
        container.get_counter(MetricName.named(SYSTEM_NAMESPACE, "not_reserved")).inc(1)

        assert container.emit_descriptors() == []

    def test_system_name_on_other_kinds_is_a_user_metric(self):
        """Test that reserved URNs apply to counters only."""
        name = MetricName.named(SYSTEM_NAMESPACE, ELEMENT_COUNT_METRIC)
        unbound = MetricContainer.unbound()
        unbound.get_gauge(name).set(3, T0)
        unbound.get_distribution(name).update(3)
        bound = MetricContainer("step")
        bound.get_gauge(name).set(3, T0)
        bound.get_distribution(name).update(3)

        assert unbound.emit_descriptors() == []
        assert {record.type for record in bound.emit_descriptors()} == {
            DescriptorType.USER_LATEST_INT64,
            DescriptorType.USER_DISTRIBUTION_INT64,
        }

    def test_bound_counter(self):
        """Test a bound counter record."""
        container = MetricContainer("step")
        container.get_counter(MetricName.named("ns", "records")).inc(3)

        [record] = container.emit_descriptors()

        assert record == DescriptorRecord(
            type=DescriptorType.USER_SUM_INT64,
            labels={"namespace": "ns", "name": "records", "step": "step"},
            value=3,
        )

    def test_bound_distribution(self):
        """Test a bound distribution record carries sum, count, min and max."""
        container = MetricContainer("step")
        cell = container.get_distribution(MetricName.named("ns", "sizes"))
        for sample in (4, 10, 1):
            cell.update(sample)

        [record] = container.emit_descriptors()

        assert record.type is DescriptorType.USER_DISTRIBUTION_INT64
        assert record.value == {"sum": 15, "count": 3, "min": 1, "max": 10}

    def test_bound_gauge(self):
        """Test a bound gauge record and its wire form."""
        container = MetricContainer("step")
        container.get_gauge(MetricName.named("ns", "lag")).set(12, T0)

        [record] = container.emit_descriptors()
        wire = record.to_wire()

        assert record.type is DescriptorType.USER_LATEST_INT64
        assert wire["type"] == "metric:user:latest_int64:v1"
        assert wire["labels"]["step"] == "step"
        assert wire["value"]["value"] == 12
        assert wire["value"]["timestamp"].startswith("2024-01-01T00:00:00")

    def test_empty_gauge_skipped(self):
        """Test that a gauge never set is not reported."""
        container = MetricContainer("step")
        container.get_gauge(MetricName.named("ns", "lag"))

        assert container.emit_descriptors() == []

    def test_emission_is_a_pure_read(self, worker_container):
        """Test that emitting twice yields the same records."""
        bound = MetricContainer("step")
        bound.update(worker_container)

        first = bound.emit_descriptors()

        assert len(first) == 4
        assert as_tuples(bound.emit_descriptors()) == as_tuples(first)


# =============================================================================
# REGISTRY DESCRIPTOR TESTS
# =============================================================================

class TestRegistryDescriptors:
    """Tests for StepMetricsRegistry.get_descriptors and DescriptorEmitter."""

    def test_update_all_descriptors(self):
        """Test records after folding one registry with a bound and an unbound metric."""
        base = StepMetricsRegistry()
        base.get_container("myStep1").get_counter(MetricName.named("ns", "name1")).inc(7)
        base.get_unbound_container().get_counter(
            MetricName.named(SYSTEM_NAMESPACE, ELEMENT_COUNT_METRIC)
        ).inc(14)
        base.get_unbound_container().get_counter(MetricName.named("ns", "dropped")).inc(1)

        registry = StepMetricsRegistry()
        registry.update_all(base)

        expected = [
            DescriptorRecord(
                type=DescriptorType.USER_SUM_INT64,
                labels={"namespace": "ns", "name": "name1", "step": "myStep1"},
                value=7,
            ),
            DescriptorRecord(
                type=DescriptorType.ELEMENT_COUNT,
                labels={"namespace": SYSTEM_NAMESPACE, "name": ELEMENT_COUNT_METRIC},
                value=14,
            ),
        ]
        assert as_tuples(registry.get_descriptors()) == as_tuples(expected)

    def test_emitter_polls_current_values(self):
        """Test that each poll reflects the registry at that moment."""
        registry = StepMetricsRegistry()
        counter = registry.get_container("Read").get_counter(MetricName.named("io", "records"))
        emitter = DescriptorEmitter(registry)

        counter.inc(1)
        assert [record.value for record in emitter.poll()] == [1]

        counter.inc(2)
        assert [record["value"] for record in emitter.poll_wire()] == [3]

    def test_empty_registry_emits_nothing(self):
        """Test polling a fresh registry."""
        assert DescriptorEmitter(StepMetricsRegistry()).poll() == []
