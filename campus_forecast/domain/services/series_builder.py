"""
Series Builder - Domain Service

Assembles an ordered ``(period, value)`` series from stored college
statistics. Rows must already be restricted to the requested scope; the
metric/period combination must already be validated.

Each entity's contribution is computed per period first and the
contributions of all entities are summed afterwards. Periods without any
contribution are left out of the series.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Tuple

from campus_forecast.domain.entities.prediction import MetricKind, PeriodType
from campus_forecast.domain.entities.statistics import (
    CollegeMonthExpense,
    CollegeYearStat,
    SeriesPoint,
)

MONTHS_PER_YEAR = 12

# (college_id, period) -> value
_EntityValues = Dict[Tuple[int, date], float]


def period_start(period_type: PeriodType, year: int, month: int = 1) -> date:
    if period_type == PeriodType.YEARLY:
        return date(year, 1, 1)
    return date(year, month, 1)


def _revenue_by_entity(
    year_stats: Iterable[CollegeYearStat], period_type: PeriodType
) -> _EntityValues:
    values: _EntityValues = {}
    for stat in year_stats:
        if stat.annual_revenue is None:
            continue
        if period_type == PeriodType.YEARLY:
            values[(stat.college_id, period_start(period_type, stat.year))] = float(
                stat.annual_revenue
            )
            continue
        monthly_share = float(stat.annual_revenue) / MONTHS_PER_YEAR
        for month in range(1, MONTHS_PER_YEAR + 1):
            key = (stat.college_id, period_start(period_type, stat.year, month))
            values[key] = monthly_share
    return values


def _expenses_by_entity(
    month_expenses: Iterable[CollegeMonthExpense], period_type: PeriodType
) -> _EntityValues:
    values: _EntityValues = defaultdict(float)
    for expense in month_expenses:
        key = (expense.college_id, period_start(period_type, expense.year, expense.month))
        values[key] += float(expense.expenses)
    return dict(values)


def _students_by_entity(year_stats: Iterable[CollegeYearStat]) -> _EntityValues:
    return {
        (stat.college_id, date(stat.year, 1, 1)): float(stat.annual_students)
        for stat in year_stats
        if stat.annual_students is not None
    }


def _profit_by_entity(
    year_stats: Iterable[CollegeYearStat],
    month_expenses: Iterable[CollegeMonthExpense],
    period_type: PeriodType,
) -> _EntityValues:
    revenue = _revenue_by_entity(year_stats, period_type)
    expenses = _expenses_by_entity(month_expenses, period_type)
    return {
        key: revenue[key] - spent for key, spent in expenses.items() if key in revenue
    }


def build_series(
    metric: MetricKind,
    period_type: PeriodType,
    year_stats: Iterable[CollegeYearStat],
    month_expenses: Iterable[CollegeMonthExpense],
) -> List[SeriesPoint]:
    """Build the series of ``metric`` at ``period_type`` granularity.

    Args:
        metric: Quantity to assemble
        period_type: Yearly or monthly bucketing
        year_stats: Yearly revenue/headcount rows of the scope
        month_expenses: Expense rows of the scope

    Returns:
        Points ordered ascending by period, one per period with data
    """
    if metric == MetricKind.REVENUE:
        per_entity = _revenue_by_entity(year_stats, period_type)
    elif metric == MetricKind.EXPENSES:
        per_entity = _expenses_by_entity(month_expenses, period_type)
    elif metric == MetricKind.PROFIT:
        per_entity = _profit_by_entity(year_stats, month_expenses, period_type)
    else:
        per_entity = _students_by_entity(year_stats)

    totals: Dict[date, float] = defaultdict(float)
    for (_, period), value in per_entity.items():
        totals[period] += value

    return [
        SeriesPoint(period=period, value=round(totals[period], 2))
        for period in sorted(totals)
    ]
