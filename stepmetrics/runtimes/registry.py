"""
Step Metrics Registry.

Maps step names to metric containers, plus one reserved container for
unbound metrics. Registries are folded upward: worker containers into an
attempt registry with ``update``, attempt registries into a job registry
with ``update_all``.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple, Union

from ..constants import (
    LOG_CONTAINER_CREATED,
    LOG_REGISTRY_FOLDED,
    LOG_REGISTRY_RESET,
)
from ..spec import DescriptorRecord
from .container import ContainerSnapshot, MetricContainer

logger = logging.getLogger(__name__)


class StepMetricsRegistry:
    """
    Registry of per-step metric containers.

    Containers are created lazily and never removed. Equality and hash are
    structural over the full step-to-container mapping, unbound container
    included, so merely creating a container or cell changes equality.

    The registry may be read and written by many threads without external
    locking. Its lock covers only container creation and copying the
    container list; bulk operations are not atomic across cells.

    Usage:
        registry = StepMetricsRegistry()
        registry.update("ParseRecords", worker_container)

        job_registry = StepMetricsRegistry()
        job_registry.update_all(registry)
    """

    def __init__(self, job_id: Optional[str] = None, attempt_id: Optional[str] = None):
        """
        Initialize an empty registry.

        Args:
            job_id: Job this registry belongs to (logging only)
            attempt_id: Job attempt this registry belongs to (logging only)
        """
        self._job_id = job_id
        self._attempt_id = attempt_id
        self._lock = threading.Lock()
        self._unbound = MetricContainer.unbound()
        self._containers: Dict[str, MetricContainer] = {}

    @property
    def job_id(self) -> Optional[str]:
        return self._job_id

    @property
    def attempt_id(self) -> Optional[str]:
        return self._attempt_id

    # -------------------------------------------------------------------------
    # Containers
    # -------------------------------------------------------------------------

    def get_container(self, step: Optional[str]) -> MetricContainer:
        """Get or create the container of a step; None is the unbound container."""
        if step is None:
            return self._unbound
        container = self._containers.get(step)
        if container is None:
            with self._lock:
                container = self._containers.get(step)
                if container is None:
                    container = self._containers[step] = MetricContainer(step)
                    logger.debug(LOG_CONTAINER_CREATED.format(step=step))
        return container

    def get_unbound_container(self) -> MetricContainer:
        return self._unbound

    def containers(self) -> List[Tuple[Optional[str], MetricContainer]]:
        """All (step, container) pairs, unbound first with step None."""
        with self._lock:
            bound = list(self._containers.items())
        return [(None, self._unbound), *bound]

    def steps(self) -> List[str]:
        """Names of all bound steps."""
        with self._lock:
            return list(self._containers)

    # -------------------------------------------------------------------------
    # Merging
    # -------------------------------------------------------------------------

    def update(
        self,
        step: Optional[str],
        source: Union[MetricContainer, ContainerSnapshot],
    ) -> None:
        """
        Merge a container into the container of step.

        The caller keeps ownership of source and may reuse or discard it.
        """
        self.get_container(step).update(source)

    def update_all(self, other: "StepMetricsRegistry") -> None:
        """Merge every container of other, bound and unbound, into this registry."""
        containers = other.containers()
        for step, container in containers:
            self.get_container(step).update(container)
        logger.debug(LOG_REGISTRY_FOLDED.format(containers=len(containers), registry=self))

    def reset(self) -> None:
        """Reset every tracked cell to identity. No container is removed."""
        containers = self.containers()
        for _step, container in containers:
            container.reset()
        logger.info(LOG_REGISTRY_RESET.format(registry=self, containers=len(containers)))

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dict[Optional[str], ContainerSnapshot]:
        """Point-in-time snapshot of every container keyed by step."""
        return {step: container.snapshot() for step, container in self.containers()}

    def get_descriptors(self) -> List[DescriptorRecord]:
        """
        Descriptor records for the control plane.

        Bound steps report every cell; the unbound container reports only
        reserved system metrics, without a step label.
        """
        records: List[DescriptorRecord] = []
        for _step, container in self.containers():
            records.extend(container.emit_descriptors())
        return records

    # -------------------------------------------------------------------------
    # Equality
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepMetricsRegistry):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __hash__(self) -> int:
        return hash(frozenset(self.snapshot().items()))

    def __repr__(self) -> str:
        return (
            f"StepMetricsRegistry(job_id={self._job_id!r}, "
            f"attempt_id={self._attempt_id!r}, steps={len(self._containers)})"
        )
