"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PredictionNotFoundError(DomainError):
    """Raised when a prediction does not exist or belongs to another owner."""

    def __init__(self, prediction_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Prediction with ID {prediction_id} not found"
        super().__init__(message, details)


class CollegeNotFoundError(PredictionNotFoundError):
    """Raised when the college referenced by a scope does not exist."""

    def __init__(self, college_id: int, details: Optional[Dict[str, Any]] = None):
        DomainError.__init__(self, f"College with ID {college_id} not found", details)


class PredictionValidationError(DomainError):
    """Raised when a prediction request is inconsistent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InsufficientDataError(PredictionValidationError):
    """Raised when a series is shorter than the minimum point threshold."""

    def __init__(
        self,
        available: int,
        required: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.available = available
        self.required = required
        payload = {"available_points": available, "required_points": required}
        payload.update(details or {})
        super().__init__(
            f"Not enough data to forecast: {available} point(s) available, "
            f"at least {required} required",
            payload,
        )


class InvalidCombinationError(PredictionValidationError):
    """Raised when a metric cannot be forecast at the requested granularity."""

    def __init__(self, metric: str, period_type: str):
        super().__init__(
            f"Metric '{metric}' is not available with '{period_type}' periods",
            {"metric": metric, "period_type": period_type},
        )


class ValueConstraintViolationError(PredictionValidationError):
    """Raised when input points break the rules of their series type."""

    def __init__(self, series_type: str, errors: list):
        super().__init__(
            f"{len(errors)} point(s) violate the '{series_type}' series rules",
            {"series_type": series_type, "errors": errors},
        )


class PredictionOperationError(DomainError):
    """Raised when computing or persisting a prediction fails unexpectedly."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
