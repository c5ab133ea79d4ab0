"""
Default Configuration Values

Fallback values used when neither environment variables nor explicit
options provide a setting. Required options (job id, attempt id) have no
default; constructing a registry without them fails.
"""

from typing import List

from ..constants import DEFAULT_STEP_PATH_SEPARATOR, REQUIRED_OPTIONS


class Defaults:
    """Static default values for metrics configuration."""

    STEP_PATH_SEPARATOR: str = DEFAULT_STEP_PATH_SEPARATOR

    REQUIRED_OPTIONS: List[str] = list(REQUIRED_OPTIONS)
