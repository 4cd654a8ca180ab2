"""
Application Use Cases - Prediction Orchestrator

Entry point of the forecasting engine for the HTTP layer. It assembles or
validates the input series, runs the extrapolation, applies domain bounds
and persists each prediction with its observations and forecast points in
a single write.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple
from uuid import UUID

import structlog

from campus_forecast.application.dtos.prediction_dto import (
    AvailablePeriodsResponseDTO,
    ForecastPointDTO,
    LabeledPointDTO,
    ObservationDTO,
    PredictionCreateDTO,
    PredictionResponseDTO,
    PredictionSummaryDTO,
    PredictionUpdateDTO,
    SeriesPointInputDTO,
)
from campus_forecast.domain.entities.errors import (
    CollegeNotFoundError,
    DomainError,
    InsufficientDataError,
    PredictionNotFoundError,
    PredictionOperationError,
    PredictionValidationError,
)
from campus_forecast.domain.entities.prediction import (
    ForecastPoint,
    MetricKind,
    PeriodType,
    Prediction,
    Scope,
    ScopeType,
    SeriesSource,
    SeriesType,
)
from campus_forecast.domain.entities.statistics import SeriesPoint
from campus_forecast.domain.repositories.college_stats_repository import (
    ICollegeStatsRepository,
)
from campus_forecast.domain.repositories.prediction_repository import (
    IPredictionRepository,
)
from campus_forecast.domain.services import (
    PeriodCalendar,
    build_series,
    clamp_value,
    ensure_supported_combination,
    extrapolate,
    validate_series_values,
)
from campus_forecast.shared.consts import (
    DEFAULT_MAX_FUTURE_STEPS,
    DEFAULT_MIN_INPUT_POINTS,
    DEFAULT_MIN_SERIES_POINTS,
    MIN_EXTRAPOLATION_POINTS,
)

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PredictionOrchestrator:
    """Create, recompute, read and delete predictions of an owner."""

    def __init__(
        self,
        prediction_repository: IPredictionRepository,
        college_stats_repository: ICollegeStatsRepository,
        calendar: Optional[PeriodCalendar] = None,
        *,
        min_series_points: int = DEFAULT_MIN_SERIES_POINTS,
        min_input_points: int = DEFAULT_MIN_INPUT_POINTS,
        max_future_steps: int = DEFAULT_MAX_FUTURE_STEPS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            prediction_repository: Storage of predictions
            college_stats_repository: Source of the stored statistics
            calendar: Period arithmetic and labels
            min_series_points: Minimum length of a series built from statistics
            min_input_points: Minimum length of a directly supplied series
            max_future_steps: Upper bound of the forecast horizon
            clock: Source of creation/update timestamps
        """
        self._prediction_repository = prediction_repository
        self._college_stats_repository = college_stats_repository
        self._calendar = calendar or PeriodCalendar()
        self._min_series_points = max(min_series_points, MIN_EXTRAPOLATION_POINTS)
        self._min_input_points = max(min_input_points, MIN_EXTRAPOLATION_POINTS)
        self._max_future_steps = max_future_steps
        self._clock = clock

    async def create_prediction(
        self, owner_id: str, request: PredictionCreateDTO
    ) -> PredictionResponseDTO:
        """
        Build the input series, forecast it and persist the result.

        Raises:
            PredictionNotFoundError: If the scoped college does not exist
            PredictionValidationError: If the request or series is invalid
            PredictionOperationError: If computing or storing fails unexpectedly
        """
        self._check_future_steps(request.future_steps)

        try:
            now = self._clock()
            prediction = Prediction(
                owner_id=owner_id,
                title=request.title,
                description=request.description,
                metric=request.metric,
                source=request.source,
                period_type=request.period_type,
                future_steps=request.future_steps,
                created_at=now,
                updated_at=now,
            )

            if request.points is None:
                if request.metric is None:
                    raise PredictionValidationError(
                        "Either points or a metric must be provided"
                    )
                scope = await self._resolve_scope(request.scope_type, request.scope_id)
                series = await self._assemble_series(
                    scope, request.metric, request.period_type
                )
                if len(series) < self._min_series_points:
                    raise InsufficientDataError(len(series), self._min_series_points)
                pairs = [(point.period, point.value) for point in series]
            else:
                scope = Scope(scope_type=request.scope_type, scope_id=request.scope_id)
                prediction.series_type = request.series_type
                pairs = self._direct_series(request.points, request.series_type)

            prediction.scope = scope
            prediction.replace_observations(pairs)
            prediction.replace_forecast(self._compute_forecast(prediction))

            await self._prediction_repository.create(prediction)
        except PredictionOperationError as exc:
            self._log_failure("create", exc, owner_id=owner_id)
            raise
        except DomainError:
            raise
        except Exception as exc:
            self._log_failure("create", exc, owner_id=owner_id)
            raise PredictionOperationError("Failed to create prediction") from exc

        logger.info(
            "prediction.created",
            prediction_id=str(prediction.id),
            owner_id=owner_id,
            source=prediction.source.value,
            observations=len(prediction.observations),
            forecast_points=len(prediction.forecast_points),
        )
        return self._to_response_dto(prediction)

    async def update_prediction(
        self, owner_id: str, prediction_id: UUID, request: PredictionUpdateDTO
    ) -> PredictionResponseDTO:
        """
        Apply metadata changes and recompute the forecast when needed.

        The forecast is regenerated only when new points, a different period
        type or a different number of steps are requested. New points replace
        the stored observations. A new period type on a series assembled from
        statistics rebuilds the observations at that granularity. Otherwise
        the stored observations are reused.

        Raises:
            PredictionNotFoundError: If the prediction is missing or not owned
            PredictionValidationError: If the new input is invalid
            InvalidCombinationError: If the metric does not support the period type
            InsufficientDataError: If too few observations remain
            PredictionOperationError: If computing or storing fails unexpectedly
        """
        prediction = await self._get_owned(owner_id, prediction_id)

        if request.future_steps is not None:
            self._check_future_steps(request.future_steps)

        try:
            if request.title is not None:
                prediction.title = request.title
            if request.description is not None:
                prediction.description = request.description

            period_changed = (
                request.period_type is not None
                and request.period_type != prediction.period_type
            )
            steps_changed = (
                request.future_steps is not None
                and request.future_steps != prediction.future_steps
            )
            scope_loaded = False

            if request.points is not None:
                series_type = (
                    request.series_type or prediction.series_type or SeriesType.GENERIC
                )
                pairs = self._direct_series(request.points, series_type)
                prediction.replace_observations(pairs)
                prediction.source = SeriesSource.DIRECT
                prediction.series_type = series_type
            else:
                if request.series_type is not None:
                    if prediction.source != SeriesSource.DIRECT:
                        raise PredictionValidationError(
                            "series_type only applies to directly supplied points",
                            {"source": prediction.source.value},
                        )
                    validate_series_values(
                        request.series_type, prediction.observed_values()
                    )
                    prediction.series_type = request.series_type

                if (
                    period_changed
                    and prediction.source == SeriesSource.AGGREGATE
                    and prediction.metric is not None
                ):
                    prediction.scope = await self._resolve_scope(
                        prediction.scope.scope_type, prediction.scope.scope_id
                    )
                    scope_loaded = True
                    series = await self._assemble_series(
                        prediction.scope, prediction.metric, request.period_type
                    )
                    if len(series) < self._min_series_points:
                        raise InsufficientDataError(
                            len(series), self._min_series_points
                        )
                    prediction.replace_observations(
                        [(point.period, point.value) for point in series]
                    )

            if period_changed:
                prediction.period_type = request.period_type
            if steps_changed:
                prediction.future_steps = request.future_steps

            recompute = request.points is not None or period_changed or steps_changed
            if recompute:
                if len(prediction.observations) < MIN_EXTRAPOLATION_POINTS:
                    raise InsufficientDataError(
                        len(prediction.observations), MIN_EXTRAPOLATION_POINTS
                    )
                if prediction.applies_bounds and not scope_loaded:
                    prediction.scope = await self._resolve_scope(
                        prediction.scope.scope_type, prediction.scope.scope_id
                    )
                prediction.replace_forecast(self._compute_forecast(prediction))

            prediction.updated_at = self._clock()
            await self._prediction_repository.update(prediction)
        except PredictionOperationError as exc:
            self._log_failure("update", exc, prediction_id=str(prediction_id))
            raise
        except DomainError:
            raise
        except Exception as exc:
            self._log_failure("update", exc, prediction_id=str(prediction_id))
            raise PredictionOperationError("Failed to update prediction") from exc

        logger.info(
            "prediction.updated",
            prediction_id=str(prediction.id),
            recomputed=recompute,
        )
        return self._to_response_dto(prediction)

    async def delete_prediction(self, owner_id: str, prediction_id: UUID) -> None:
        """Delete an owned prediction with its observations and forecast points."""
        prediction = await self._get_owned(owner_id, prediction_id)
        try:
            await self._prediction_repository.delete(prediction.id)
        except PredictionOperationError as exc:
            self._log_failure("delete", exc, prediction_id=str(prediction_id))
            raise
        logger.info("prediction.deleted", prediction_id=str(prediction_id))

    async def get_prediction(
        self, owner_id: str, prediction_id: UUID
    ) -> PredictionResponseDTO:
        prediction = await self._get_owned(owner_id, prediction_id)
        return self._to_response_dto(prediction)

    async def list_predictions(
        self, owner_id: str, skip: int = 0, limit: int = 100
    ) -> List[PredictionSummaryDTO]:
        """List the owner's predictions, newest first."""
        predictions = await self._prediction_repository.find_by_owner(
            owner_id, skip=skip, limit=limit
        )
        return [self._to_summary_dto(prediction) for prediction in predictions]

    async def get_available_periods(
        self,
        scope_type: ScopeType,
        scope_id: Optional[int],
        metric: MetricKind,
        period_type: PeriodType,
    ) -> AvailablePeriodsResponseDTO:
        """Return the periods that stored statistics provide for a series."""
        scope = await self._resolve_scope(scope_type, scope_id)
        series = await self._assemble_series(scope, metric, period_type)
        return AvailablePeriodsResponseDTO(
            scope_type=scope.scope_type,
            scope_id=scope.scope_id,
            metric=metric,
            period_type=period_type,
            count=len(series),
            periods=[
                LabeledPointDTO(
                    label=self._calendar.label(point.period, period_type),
                    period=point.period,
                    value=point.value,
                )
                for point in series
            ],
        )

    async def _get_owned(self, owner_id: str, prediction_id: UUID) -> Prediction:
        prediction = await self._prediction_repository.find_by_id(
            prediction_id, owner_id=owner_id
        )
        if prediction is None:
            raise PredictionNotFoundError(str(prediction_id))
        return prediction

    @staticmethod
    def _log_failure(operation: str, exc: Exception, **context) -> None:
        logger.error(
            "prediction.unexpected_error",
            operation=operation,
            error=str(exc),
            exc_info=exc,
            **context,
        )

    def _check_future_steps(self, future_steps: int) -> None:
        if not 1 <= future_steps <= self._max_future_steps:
            raise PredictionValidationError(
                f"future_steps must be between 1 and {self._max_future_steps}",
                {"future_steps": future_steps},
            )

    async def _resolve_scope(
        self, scope_type: ScopeType, scope_id: Optional[int]
    ) -> Scope:
        """Load the capacity attributes of a college scope."""
        if scope_type == ScopeType.UNIVERSITY:
            return Scope(scope_type=ScopeType.UNIVERSITY)

        if scope_id is None:
            raise PredictionValidationError(
                "scope_id is required for a college scope",
                {"scope_type": scope_type.value},
            )
        college = await self._college_stats_repository.find_college(scope_id)
        if college is None:
            raise CollegeNotFoundError(scope_id)
        return Scope(
            scope_type=ScopeType.COLLEGE,
            scope_id=college.id,
            max_students_capacity=college.max_students_capacity,
            max_annual_revenue=college.max_annual_revenue,
        )

    async def _assemble_series(
        self, scope: Scope, metric: MetricKind, period_type: PeriodType
    ) -> List[SeriesPoint]:
        ensure_supported_combination(metric, period_type)
        year_stats = await self._college_stats_repository.get_year_stats(
            scope.scope_id
        )
        month_expenses = await self._college_stats_repository.get_month_expenses(
            scope.scope_id
        )
        return build_series(metric, period_type, year_stats, month_expenses)

    def _direct_series(
        self, points: Sequence[SeriesPointInputDTO], series_type: SeriesType
    ) -> List[Tuple]:
        """Sort supplied points by period and check them against their type."""
        if len(points) < self._min_input_points:
            raise InsufficientDataError(len(points), self._min_input_points)

        ordered = sorted(points, key=lambda point: point.period)
        validate_series_values(series_type, [point.value for point in ordered])
        return [(point.period, point.value) for point in ordered]

    def _compute_forecast(self, prediction: Prediction) -> List[ForecastPoint]:
        """Extrapolate the observed series and date the predicted values."""
        last = prediction.last_observation()
        if last is None:
            return []

        bounded_metric = prediction.metric if prediction.applies_bounds else None
        raw_values = extrapolate(prediction.observed_values(), prediction.future_steps)
        forecast: List[ForecastPoint] = []
        for step, value in enumerate(raw_values, start=1):
            if bounded_metric is not None:
                value = round(
                    clamp_value(
                        bounded_metric, prediction.scope, value, prediction.period_type
                    ),
                    2,
                )
            forecast.append(
                ForecastPoint(
                    index=last.index + step,
                    predicted_value=value,
                    period=self._calendar.advance(
                        last.period, prediction.period_type, step
                    ),
                )
            )
        return forecast

    def _to_summary_dto(self, prediction: Prediction) -> PredictionSummaryDTO:
        return PredictionSummaryDTO(
            id=prediction.id,
            title=prediction.title,
            description=prediction.description,
            scope_type=prediction.scope.scope_type,
            scope_id=prediction.scope.scope_id,
            metric=prediction.metric,
            series_type=prediction.series_type,
            source=prediction.source,
            period_type=prediction.period_type,
            future_steps=prediction.future_steps,
            start_date=prediction.start_date,
            created_at=prediction.created_at,
            updated_at=prediction.updated_at,
        )

    def _to_response_dto(self, prediction: Prediction) -> PredictionResponseDTO:
        summary = self._to_summary_dto(prediction)
        return PredictionResponseDTO(
            **summary.model_dump(),
            observations=[
                ObservationDTO(index=item.index, value=item.value, period=item.period)
                for item in prediction.observations
            ],
            forecast_points=[
                ForecastPointDTO(
                    index=item.index,
                    predicted_value=item.predicted_value,
                    period=item.period,
                )
                for item in prediction.forecast_points
            ],
            labeled=[
                LabeledPointDTO(
                    label=self._calendar.label(item.period, prediction.period_type),
                    period=item.period,
                    value=item.predicted_value,
                )
                for item in prediction.forecast_points
            ],
        )
