"""Domain bounds applied to raw predicted values."""

from typing import Optional

from campus_forecast.domain.entities.prediction import MetricKind, PeriodType, Scope

NON_NEGATIVE_METRICS = frozenset(
    {MetricKind.REVENUE, MetricKind.EXPENSES, MetricKind.STUDENTS}
)


def ceiling_for(
    metric: MetricKind, scope: Scope, period_type: PeriodType = PeriodType.YEARLY
) -> Optional[float]:
    """Return the capacity ceiling of ``scope`` for ``metric``, if any."""
    if scope.is_aggregate:
        return None

    if metric == MetricKind.STUDENTS and scope.max_students_capacity is not None:
        return float(scope.max_students_capacity)

    if metric == MetricKind.REVENUE and scope.max_annual_revenue is not None:
        if period_type == PeriodType.MONTHLY:
            return scope.max_annual_revenue / 12
        return float(scope.max_annual_revenue)

    return None


def clamp_value(
    metric: MetricKind,
    scope: Scope,
    value: float,
    period_type: PeriodType = PeriodType.YEARLY,
) -> float:
    """Floor then cap a predicted value according to metric and scope."""
    clamped = float(value)
    if metric in NON_NEGATIVE_METRICS:
        clamped = max(clamped, 0.0)

    ceiling = ceiling_for(metric, scope, period_type)
    if ceiling is not None:
        clamped = min(clamped, ceiling)
    return clamped
