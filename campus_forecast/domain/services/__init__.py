"""
Domain Services Package

Pure forecasting logic: series assembly, trend classification,
extrapolation, bounds and calendar arithmetic.
"""

from .bounds import ceiling_for, clamp_value
from .extrapolation import TrendLabel, classify_window, extrapolate
from .period_calendar import PeriodCalendar
from .series_builder import build_series
from .series_rules import (
    METRIC_PERIODS,
    SERIES_RULES,
    SeriesRule,
    ensure_supported_combination,
    validate_series_values,
)

__all__ = [
    "build_series",
    "classify_window",
    "extrapolate",
    "TrendLabel",
    "clamp_value",
    "ceiling_for",
    "PeriodCalendar",
    "SeriesRule",
    "SERIES_RULES",
    "METRIC_PERIODS",
    "ensure_supported_combination",
    "validate_series_values",
]
