"""
Metrics Settings

Settings with environment variable support.
Priority: Explicit options > Environment Variables > Defaults

Usage:
    from stepmetrics.config import get_settings

    settings = get_settings()
    separator = settings.step_path_separator
"""

from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from ..constants import SETTINGS_ENV_PREFIX
from .defaults import Defaults


class MetricsSettings(BaseSettings):
    """
    Metrics settings with automatic environment variable loading.

    Environment variables are loaded with the prefix STEPMETRICS_.
    Example: STEPMETRICS_JOB_ID sets job_id
    """

    # =========================================================================
    # Job identity
    # =========================================================================
    job_id: Optional[str] = Field(
        default=None,
        description="Job the metrics belong to"
    )
    attempt_id: Optional[str] = Field(
        default=None,
        description="Job attempt the metrics belong to"
    )

    # =========================================================================
    # Queries
    # =========================================================================
    step_path_separator: str = Field(
        default=Defaults.STEP_PATH_SEPARATOR,
        min_length=1,
        description="Separator used for step sub-path matching"
    )

    model_config = {
        "env_prefix": SETTINGS_ENV_PREFIX,
        "case_sensitive": False,
        "extra": "ignore",
    }

    def to_dict(self) -> Dict[str, Any]:
        """Export settings to dictionary."""
        return self.model_dump()


@lru_cache()
def get_settings() -> MetricsSettings:
    """
    Get cached settings instance.

    Call MetricsSettings() directly if you need a fresh instance.
    """
    return MetricsSettings()
