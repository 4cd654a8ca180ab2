"""
Domain Entities - Prediction

A prediction owns the observed series it was computed from and the
forecast points derived from it. Forecast points are never supplied by
callers; they are regenerated as a whole on every recompute.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4


class ScopeType(str, Enum):
    """Entity or aggregate a series is computed over."""

    COLLEGE = "college"
    UNIVERSITY = "university"


class MetricKind(str, Enum):
    """Stored quantity (or derived quantity) being forecast."""

    REVENUE = "revenue"
    EXPENSES = "expenses"
    PROFIT = "profit"
    STUDENTS = "students"


class PeriodType(str, Enum):
    """Time bucketing of a series."""

    YEARLY = "yearly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class SeriesSource(str, Enum):
    """Where the observed series of a prediction came from."""

    AGGREGATE = "aggregate"
    DIRECT = "direct"


class SeriesType(str, Enum):
    """Logical label of a directly supplied series."""

    GENERIC = "generic"
    STUDENT_COUNT = "student_count"
    REVENUE = "revenue"
    EXPENSES = "expenses"
    PROFIT = "profit"
    PERCENTAGE = "percentage"
    STUDENT_PERFORMANCE = "student_performance"


@dataclass
class Scope:
    """Scope descriptor with the capacity attributes of a single college."""

    scope_type: ScopeType = ScopeType.UNIVERSITY
    scope_id: Optional[int] = None
    max_students_capacity: Optional[int] = None
    max_annual_revenue: Optional[float] = None

    @property
    def is_aggregate(self) -> bool:
        return self.scope_type == ScopeType.UNIVERSITY


@dataclass
class Observation:
    """One observed value of the input series."""

    index: int
    value: float
    period: date


@dataclass
class ForecastPoint:
    """One predicted value, numbered after the last observation."""

    index: int
    predicted_value: float
    period: date


@dataclass
class Prediction:
    """A forecast request together with its observed and predicted series."""

    id: UUID = field(default_factory=uuid4)
    owner_id: str = ""
    title: str = ""
    description: Optional[str] = None
    scope: Scope = field(default_factory=Scope)
    metric: Optional[MetricKind] = None
    series_type: Optional[SeriesType] = None
    source: SeriesSource = SeriesSource.AGGREGATE
    period_type: PeriodType = PeriodType.YEARLY
    future_steps: int = 3
    observations: List[Observation] = field(default_factory=list)
    forecast_points: List[ForecastPoint] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def start_date(self) -> Optional[date]:
        """Earliest observed period."""
        if not self.observations:
            return None
        return min(observation.period for observation in self.observations)

    @property
    def applies_bounds(self) -> bool:
        return self.source == SeriesSource.AGGREGATE and self.metric is not None

    def observed_values(self) -> List[float]:
        ordered = sorted(self.observations, key=lambda item: item.index)
        return [item.value for item in ordered]

    def last_observation(self) -> Optional[Observation]:
        if not self.observations:
            return None
        return max(self.observations, key=lambda item: item.index)

    def replace_observations(self, points: List[tuple]) -> None:
        """Replace the observed series with ``(period, value)`` pairs.

        Pairs are sorted by period and renumbered from 1.
        """
        ordered = sorted(points, key=lambda pair: pair[0])
        self.observations = [
            Observation(index=position, value=float(value), period=period)
            for position, (period, value) in enumerate(ordered, start=1)
        ]

    def replace_forecast(self, points: List[ForecastPoint]) -> None:
        self.forecast_points = list(points)
