"""Domain entities for the stored college statistics read by the forecaster."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(slots=True)
class College:
    """Organisational unit with optional capacity ceilings."""

    id: int
    name: str
    max_students_capacity: Optional[int] = None
    max_annual_revenue: Optional[float] = None


@dataclass(slots=True)
class CollegeYearStat:
    """Yearly revenue and headcount of a college."""

    college_id: int
    year: int
    annual_revenue: Optional[float] = None
    annual_students: Optional[int] = None


@dataclass(slots=True)
class CollegeMonthExpense:
    """A single expense entry booked in a month."""

    college_id: int
    year: int
    month: int
    expenses: float
    description: Optional[str] = None


@dataclass(slots=True)
class SeriesPoint:
    """A ``(period, value)`` pair of an assembled series."""

    period: date
    value: float
