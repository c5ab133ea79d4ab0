"""
Metrics Factory.

Builds registries and result views from external configuration. Required
options are checked at construction and never silently defaulted.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..config import Defaults, MetricsSettings, get_settings
from ..constants import LOG_REGISTRY_CREATED, OPTION_ATTEMPT_ID, OPTION_JOB_ID
from ..exceptions import MissingConfigurationError
from .query import MetricResults, as_attempted_only_results, as_metric_results
from .registry import StepMetricsRegistry

logger = logging.getLogger(__name__)


def resolve_options(
    options: Optional[Mapping[str, Any]] = None,
    settings: Optional[MetricsSettings] = None,
) -> Dict[str, Any]:
    """
    Layer explicit options over settings and check required options.

    Args:
        options: Options supplied by the runtime (take priority)
        settings: Settings to fall back to (default: get_settings())

    Returns:
        Resolved option values

    Raises:
        MissingConfigurationError: If a required option is unset or empty
    """
    settings = settings or get_settings()
    resolved = {key: value for key, value in settings.to_dict().items() if value is not None}
    resolved.update({key: value for key, value in (options or {}).items() if value is not None})

    for option in Defaults.REQUIRED_OPTIONS:
        if not resolved.get(option):
            raise MissingConfigurationError(option)
    return resolved


def create_registry(
    options: Optional[Mapping[str, Any]] = None,
    settings: Optional[MetricsSettings] = None,
) -> StepMetricsRegistry:
    """
    Create a registry for one job attempt.

    Raises:
        MissingConfigurationError: If job_id or attempt_id is missing
    """
    resolved = resolve_options(options, settings)
    registry = StepMetricsRegistry(
        job_id=resolved[OPTION_JOB_ID],
        attempt_id=resolved[OPTION_ATTEMPT_ID],
    )
    logger.info(LOG_REGISTRY_CREATED.format(
        job_id=registry.job_id,
        attempt_id=registry.attempt_id,
    ))
    return registry


def create_metric_results(
    attempted: StepMetricsRegistry,
    committed: Optional[StepMetricsRegistry] = None,
    settings: Optional[MetricsSettings] = None,
) -> MetricResults:
    """
    Pick the result view a backend can support.

    Without a committed registry the view is attempted-only.
    """
    separator = (settings or get_settings()).step_path_separator
    if committed is None:
        return as_attempted_only_results(attempted, step_separator=separator)
    return as_metric_results(attempted, committed, step_separator=separator)
