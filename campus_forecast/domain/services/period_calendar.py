"""
Period Calendar - Domain Service

Calendar-aware arithmetic over series periods. Steps are pandas date
offsets, so adding months or years clips to the month end: Jan 31 plus one
month is the last day of February. The calendar is injected into the
orchestrator so tests can control it.
"""

from datetime import date

import pandas as pd

from campus_forecast.domain.entities.prediction import PeriodType


class PeriodCalendar:
    """Advances and labels periods according to their granularity."""

    @staticmethod
    def _shift(start: date, offset: pd.DateOffset) -> date:
        return (pd.Timestamp(start) + offset).date()

    def add_months(self, start: date, months: int) -> date:
        return self._shift(start, pd.DateOffset(months=months))

    def advance(self, start: date, period_type: PeriodType, steps: int) -> date:
        """Move ``start`` forward by ``steps`` units of ``period_type``."""
        if period_type == PeriodType.YEARLY:
            return self._shift(start, pd.DateOffset(years=steps))
        if period_type == PeriodType.MONTHLY:
            return self.add_months(start, steps)
        if period_type == PeriodType.WEEKLY:
            return self._shift(start, pd.DateOffset(weeks=steps))
        raise ValueError(f"Unsupported period type: {period_type}")

    def label(self, period: date, period_type: PeriodType) -> str:
        """Display label of a period: ``2025``, ``2025-03`` or ``Week 12 - 2025``."""
        if period_type == PeriodType.YEARLY:
            return f"{period.year:04d}"
        if period_type == PeriodType.MONTHLY:
            return f"{period.year:04d}-{period.month:02d}"
        if period_type == PeriodType.WEEKLY:
            iso_year, iso_week, _ = period.isocalendar()
            return f"Week {iso_week} - {iso_year}"
        raise ValueError(f"Unsupported period type: {period_type}")
