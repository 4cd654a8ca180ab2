"""
Presentation Layer - Predictions Controller

Exposes endpoints to create, inspect, recompute and delete forecasts.
The requesting owner is read from the X-Owner-Id header.
"""

from typing import List, Optional
from uuid import UUID

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status

from campus_forecast.application.dtos.prediction_dto import (
    AvailablePeriodsResponseDTO,
    PredictionCreateDTO,
    PredictionResponseDTO,
    PredictionSummaryDTO,
    PredictionUpdateDTO,
)
from campus_forecast.application.use_cases.prediction_orchestrator import (
    PredictionOrchestrator,
)
from campus_forecast.domain.entities.errors import (
    PredictionNotFoundError,
    PredictionOperationError,
    PredictionValidationError,
)
from campus_forecast.domain.entities.prediction import MetricKind, PeriodType, ScopeType
from campus_forecast.main.container import AppContainer
from campus_forecast.shared.consts import OWNER_HEADER

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/predictions", tags=["Predictions"])


def owner_id_header(
    owner_id: str = Header(
        ..., alias=OWNER_HEADER, min_length=1, description="Requesting owner"
    ),
) -> str:
    return owner_id


def _to_http_error(exc: Exception, **context: str) -> HTTPException:
    if isinstance(exc, PredictionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PredictionValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": exc.message, "details": exc.details},
        )
    if not isinstance(exc, PredictionOperationError):
        logger.error(
            "prediction.unexpected_error", error=str(exc), exc_info=exc, **context
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post(
    "",
    response_model=PredictionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a forecast",
    description="""
    Forecast either a series assembled from stored college statistics
    (scope, metric and period type) or a directly supplied list of points.
    Returns the observed series, the forecast points and a labeled view.
    """,
)
@inject
async def create_prediction(
    payload: PredictionCreateDTO,
    owner_id: str = Depends(owner_id_header),
    orchestrator: PredictionOrchestrator = Depends(
        Provide[AppContainer.prediction_orchestrator]
    ),
) -> PredictionResponseDTO:
    try:
        return await orchestrator.create_prediction(owner_id, payload)
    except Exception as exc:
        raise _to_http_error(exc, owner_id=owner_id)


@router.get(
    "",
    response_model=List[PredictionSummaryDTO],
    summary="List the forecasts of the owner",
)
@inject
async def list_predictions(
    skip: int = Query(0, ge=0, description="Number of predictions to skip"),
    limit: int = Query(
        100, ge=1, le=1000, description="Maximum number of predictions to return"
    ),
    owner_id: str = Depends(owner_id_header),
    orchestrator: PredictionOrchestrator = Depends(
        Provide[AppContainer.prediction_orchestrator]
    ),
) -> List[PredictionSummaryDTO]:
    try:
        return await orchestrator.list_predictions(owner_id, skip=skip, limit=limit)
    except Exception as exc:
        raise _to_http_error(exc, owner_id=owner_id)


@router.get(
    "/periods",
    response_model=AvailablePeriodsResponseDTO,
    summary="Periods with stored data for a series",
)
@inject
async def get_available_periods(
    metric: MetricKind = Query(..., description="Metric to assemble"),
    period_type: PeriodType = Query(PeriodType.YEARLY, description="Bucketing"),
    scope_type: ScopeType = Query(ScopeType.UNIVERSITY, description="Scope"),
    scope_id: Optional[int] = Query(None, ge=1, description="College ID"),
    orchestrator: PredictionOrchestrator = Depends(
        Provide[AppContainer.prediction_orchestrator]
    ),
) -> AvailablePeriodsResponseDTO:
    try:
        return await orchestrator.get_available_periods(
            scope_type, scope_id, metric, period_type
        )
    except Exception as exc:
        raise _to_http_error(exc, metric=metric.value)


@router.get(
    "/{prediction_id}",
    response_model=PredictionResponseDTO,
    summary="Retrieve a forecast",
)
@inject
async def get_prediction(
    prediction_id: UUID,
    owner_id: str = Depends(owner_id_header),
    orchestrator: PredictionOrchestrator = Depends(
        Provide[AppContainer.prediction_orchestrator]
    ),
) -> PredictionResponseDTO:
    try:
        return await orchestrator.get_prediction(owner_id, prediction_id)
    except Exception as exc:
        raise _to_http_error(exc, prediction_id=str(prediction_id))


@router.put(
    "/{prediction_id}",
    response_model=PredictionResponseDTO,
    summary="Update a forecast",
    description="""
    Update title/description and, when points, period type or number of
    steps change, regenerate the forecast.
    """,
)
@inject
async def update_prediction(
    prediction_id: UUID,
    payload: PredictionUpdateDTO,
    owner_id: str = Depends(owner_id_header),
    orchestrator: PredictionOrchestrator = Depends(
        Provide[AppContainer.prediction_orchestrator]
    ),
) -> PredictionResponseDTO:
    try:
        return await orchestrator.update_prediction(owner_id, prediction_id, payload)
    except Exception as exc:
        raise _to_http_error(exc, prediction_id=str(prediction_id))


@router.delete(
    "/{prediction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a forecast",
)
@inject
async def delete_prediction(
    prediction_id: UUID,
    owner_id: str = Depends(owner_id_header),
    orchestrator: PredictionOrchestrator = Depends(
        Provide[AppContainer.prediction_orchestrator]
    ),
) -> Response:
    try:
        await orchestrator.delete_prediction(owner_id, prediction_id)
    except Exception as exc:
        raise _to_http_error(exc, prediction_id=str(prediction_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
