"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import (
    CollegeNotFoundError,
    DomainError,
    InsufficientDataError,
    InvalidCombinationError,
    PredictionNotFoundError,
    PredictionOperationError,
    PredictionValidationError,
    ValueConstraintViolationError,
)
from .prediction import (
    ForecastPoint,
    MetricKind,
    Observation,
    PeriodType,
    Prediction,
    Scope,
    ScopeType,
    SeriesSource,
    SeriesType,
)
from .statistics import College, CollegeMonthExpense, CollegeYearStat, SeriesPoint

__all__ = [
    "Prediction",
    "Observation",
    "ForecastPoint",
    "Scope",
    "ScopeType",
    "MetricKind",
    "PeriodType",
    "SeriesSource",
    "SeriesType",
    "College",
    "CollegeYearStat",
    "CollegeMonthExpense",
    "SeriesPoint",
    "DomainError",
    "PredictionNotFoundError",
    "CollegeNotFoundError",
    "PredictionValidationError",
    "InsufficientDataError",
    "InvalidCombinationError",
    "ValueConstraintViolationError",
    "PredictionOperationError",
]
