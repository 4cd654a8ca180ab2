"""
Application DTOs - Prediction

Data Transfer Objects for creating, updating and returning predictions.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from campus_forecast.domain.entities.prediction import (
    MetricKind,
    PeriodType,
    ScopeType,
    SeriesSource,
    SeriesType,
)


class SeriesPointInputDTO(BaseModel):
    """A caller-supplied observation."""

    value: float = Field(allow_inf_nan=False, description="Observed value")
    period: date = Field(description="Calendar date of the observation")


class PredictionCreateDTO(BaseModel):
    """DTO for requesting a new forecast.

    Either ``points`` are supplied directly, or the series is assembled from
    stored statistics described by ``scope_type``/``scope_id``/``metric``.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    period_type: PeriodType = Field(default=PeriodType.YEARLY)
    future_steps: int = Field(
        default=3, ge=1, description="Number of periods to forecast"
    )

    # Aggregate source
    scope_type: ScopeType = Field(default=ScopeType.UNIVERSITY)
    scope_id: Optional[int] = Field(default=None, ge=1)
    metric: Optional[MetricKind] = None

    # Direct source
    points: Optional[List[SeriesPointInputDTO]] = None
    series_type: SeriesType = Field(default=SeriesType.GENERIC)

    @model_validator(mode="after")
    def validate_source(self) -> "PredictionCreateDTO":
        if self.points is None:
            if self.metric is None:
                raise ValueError("Either points or a metric must be provided")
            if self.scope_type == ScopeType.COLLEGE and self.scope_id is None:
                raise ValueError("scope_id is required for a college scope")
        return self

    @property
    def source(self) -> SeriesSource:
        return SeriesSource.AGGREGATE if self.points is None else SeriesSource.DIRECT

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Revenue outlook",
                "description": "Yearly revenue of the engineering college",
                "scope_type": "college",
                "scope_id": 1,
                "metric": "revenue",
                "period_type": "yearly",
                "future_steps": 3,
            }
        }
    }


class PredictionUpdateDTO(BaseModel):
    """DTO for updating a prediction. Every field is optional."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    period_type: Optional[PeriodType] = None
    future_steps: Optional[int] = Field(None, ge=1)
    points: Optional[List[SeriesPointInputDTO]] = None
    series_type: Optional[SeriesType] = None


class ObservationDTO(BaseModel):
    index: int = Field(ge=1)
    value: float
    period: date


class ForecastPointDTO(BaseModel):
    index: int = Field(ge=1)
    predicted_value: float
    period: date


class LabeledPointDTO(BaseModel):
    """Forecast point ready for display, serialized as label/date/value."""

    model_config = ConfigDict(populate_by_name=True)

    label: str
    period: date = Field(alias="date")
    value: float


class PredictionSummaryDTO(BaseModel):
    """Prediction metadata without its series."""

    id: UUID
    title: str
    description: Optional[str] = None
    scope_type: ScopeType
    scope_id: Optional[int] = None
    metric: Optional[MetricKind] = None
    series_type: Optional[SeriesType] = None
    source: SeriesSource
    period_type: PeriodType
    future_steps: int
    start_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class PredictionResponseDTO(PredictionSummaryDTO):
    """Prediction with its observed series, forecast and display view."""

    observations: List[ObservationDTO] = Field(default_factory=list)
    forecast_points: List[ForecastPointDTO] = Field(default_factory=list)
    labeled: List[LabeledPointDTO] = Field(default_factory=list)


class AvailablePeriodsResponseDTO(BaseModel):
    """Periods with stored data for a scope/metric/period type."""

    scope_type: ScopeType
    scope_id: Optional[int] = None
    metric: MetricKind
    period_type: PeriodType
    count: int
    periods: List[LabeledPointDTO]
