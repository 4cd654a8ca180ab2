"""Declarative constraints for directly supplied series and valid metric periods."""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence

from campus_forecast.domain.entities.errors import (
    InvalidCombinationError,
    ValueConstraintViolationError,
)
from campus_forecast.domain.entities.prediction import MetricKind, PeriodType, SeriesType


@dataclass(frozen=True)
class SeriesRule:
    """Numeric constraints every value of a series type must satisfy."""

    integer: bool = False
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    allow_negative: bool = True


SERIES_RULES: Mapping[SeriesType, SeriesRule] = {
    SeriesType.GENERIC: SeriesRule(),
    SeriesType.STUDENT_COUNT: SeriesRule(
        integer=True, min_value=0, allow_negative=False
    ),
    SeriesType.REVENUE: SeriesRule(min_value=0, allow_negative=False),
    SeriesType.EXPENSES: SeriesRule(min_value=0, allow_negative=False),
    SeriesType.PROFIT: SeriesRule(),
    SeriesType.PERCENTAGE: SeriesRule(min_value=0, max_value=100, allow_negative=False),
    SeriesType.STUDENT_PERFORMANCE: SeriesRule(
        min_value=0, max_value=100, allow_negative=False
    ),
}

# Period types each metric can be assembled at from stored statistics.
METRIC_PERIODS: Mapping[MetricKind, FrozenSet[PeriodType]] = {
    MetricKind.REVENUE: frozenset({PeriodType.YEARLY, PeriodType.MONTHLY}),
    MetricKind.EXPENSES: frozenset({PeriodType.YEARLY, PeriodType.MONTHLY}),
    MetricKind.PROFIT: frozenset({PeriodType.YEARLY, PeriodType.MONTHLY}),
    MetricKind.STUDENTS: frozenset({PeriodType.YEARLY}),
}


def rule_violations(rule: SeriesRule, value: float) -> List[str]:
    """Names of the constraints of ``rule`` broken by ``value``."""
    violations: List[str] = []
    if rule.integer and float(value) != int(value):
        violations.append("integer")
    if not rule.allow_negative and value < 0:
        violations.append("non_negative")
    if rule.min_value is not None and value < rule.min_value:
        violations.append(f"min:{rule.min_value:g}")
    if rule.max_value is not None and value > rule.max_value:
        violations.append(f"max:{rule.max_value:g}")
    return violations


def validate_series_values(series_type: SeriesType, values: Sequence[float]) -> None:
    """Check every value against the rule of ``series_type``.

    Raises:
        ValueConstraintViolationError: listing each offending 1-based index.
    """
    rule = SERIES_RULES[series_type]
    errors: List[Dict[str, Any]] = []
    for index, value in enumerate(values, start=1):
        for violated in rule_violations(rule, value):
            errors.append({"index": index, "value": value, "rule": violated})

    if errors:
        raise ValueConstraintViolationError(series_type.value, errors)


def ensure_supported_combination(metric: MetricKind, period_type: PeriodType) -> None:
    if period_type not in METRIC_PERIODS[metric]:
        raise InvalidCombinationError(metric.value, period_type.value)
