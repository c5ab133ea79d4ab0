"""
Exceptions for Step Metrics.

This module defines the exception classes raised by the metrics subsystem.
Combine operators never raise: a broken invariant there is a programming
error and is caught by assertions instead.
"""

from typing import Any, Dict, Optional

from .constants import COMMITTED_METRICS_UNSUPPORTED_MESSAGE


class MetricsError(Exception):
    """
    Base exception for all metrics-related errors.

    Attributes:
        message: Error message
        error_code: Stable machine-readable code
        details: Additional error details
        retryable: Whether the operation can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.retryable = retryable

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "retryable": self.retryable,
        }


class CommittedMetricsUnsupportedError(MetricsError):
    """
    Raised when a committed value is read from an attempted-only view.

    This is a structural capability gap of the execution backend, so it is
    never retryable.
    """

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            COMMITTED_METRICS_UNSUPPORTED_MESSAGE,
            error_code="COMMITTED_METRICS_UNSUPPORTED",
            details=details,
            retryable=False,
        )


class MissingConfigurationError(MetricsError):
    """Raised when a required option is absent at construction time."""

    def __init__(self, option: str, details: Optional[Dict[str, Any]] = None):
        all_details = dict(details or {})
        all_details["option"] = option
        super().__init__(
            f"Missing required configuration: {option} was not set in metrics options",
            error_code="MISSING_CONFIGURATION",
            details=all_details,
            retryable=False,
        )
        self.option = option
