"""
Configuration Module

Usage:
    from stepmetrics.config import get_settings, Defaults

    settings = get_settings()
"""

from .settings import MetricsSettings, get_settings
from .defaults import Defaults

__all__ = [
    "MetricsSettings",
    "get_settings",
    "Defaults",
]
