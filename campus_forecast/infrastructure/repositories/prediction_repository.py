"""
MongoDB Prediction Repository - Infrastructure Layer

This module implements the PredictionRepository interface using MongoDB
as the underlying data store. Observations and forecast points are
embedded in the prediction document.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

import pymongo

from campus_forecast.domain.entities.errors import (
    PredictionNotFoundError,
    PredictionOperationError,
)
from campus_forecast.domain.entities.prediction import (
    ForecastPoint,
    MetricKind,
    Observation,
    PeriodType,
    Prediction,
    Scope,
    ScopeType,
    SeriesSource,
    SeriesType,
)
from campus_forecast.domain.repositories.prediction_repository import (
    IPredictionRepository,
)
from campus_forecast.infrastructure.database import MongoDatabase
from campus_forecast.infrastructure.database.mongo_database import (
    PREDICTIONS_COLLECTION,
    DocumentNotFoundError,
)


class PredictionRepository(IPredictionRepository):
    """MongoDB implementation of the PredictionRepository."""

    COLLECTION_NAME = PREDICTIONS_COLLECTION

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB prediction repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _to_document(self, prediction: Prediction) -> Dict[str, Any]:
        """Convert a Prediction entity to a MongoDB document."""
        start_date = prediction.start_date
        return {
            "id": str(prediction.id),
            "owner_id": prediction.owner_id,
            "title": prediction.title,
            "description": prediction.description,
            "scope_type": prediction.scope.scope_type.value,
            "scope_id": prediction.scope.scope_id,
            "metric": prediction.metric.value if prediction.metric else None,
            "series_type": (
                prediction.series_type.value if prediction.series_type else None
            ),
            "source": prediction.source.value,
            "period_type": prediction.period_type.value,
            "future_steps": prediction.future_steps,
            "start_date": start_date.isoformat() if start_date else None,
            "observations": [
                {
                    "index": item.index,
                    "value": item.value,
                    "period": item.period.isoformat(),
                }
                for item in prediction.observations
            ],
            "forecast_points": [
                {
                    "index": item.index,
                    "predicted_value": item.predicted_value,
                    "period": item.period.isoformat(),
                }
                for item in prediction.forecast_points
            ],
            "created_at": prediction.created_at,
            "updated_at": prediction.updated_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> Prediction:
        """Convert a MongoDB document to a Prediction entity."""
        metric = document.get("metric")
        series_type = document.get("series_type")

        observations = sorted(
            (
                Observation(
                    index=int(item["index"]),
                    value=float(item["value"]),
                    period=date.fromisoformat(item["period"]),
                )
                for item in document.get("observations") or []
            ),
            key=lambda item: item.index,
        )
        forecast_points = sorted(
            (
                ForecastPoint(
                    index=int(item["index"]),
                    predicted_value=float(item["predicted_value"]),
                    period=date.fromisoformat(item["period"]),
                )
                for item in document.get("forecast_points") or []
            ),
            key=lambda item: item.index,
        )

        return Prediction(
            id=UUID(document["id"]),
            owner_id=document["owner_id"],
            title=document.get("title") or "",
            description=document.get("description"),
            # Capacity attributes are looked up from the college on recompute.
            scope=Scope(
                scope_type=ScopeType(document.get("scope_type", "university")),
                scope_id=document.get("scope_id"),
            ),
            metric=MetricKind(metric) if metric else None,
            series_type=SeriesType(series_type) if series_type else None,
            source=SeriesSource(document.get("source", SeriesSource.AGGREGATE.value)),
            period_type=PeriodType(document.get("period_type", "yearly")),
            future_steps=int(document.get("future_steps", 3)),
            observations=observations,
            forecast_points=forecast_points,
            created_at=document["created_at"],
            updated_at=document["updated_at"],
        )

    async def find_by_id(
        self, prediction_id: UUID, owner_id: Optional[str] = None
    ) -> Optional[Prediction]:
        """
        Find a prediction by its ID, optionally restricted to an owner.

        Returns:
            The prediction if found, None otherwise
        """
        query: Dict[str, Any] = {"id": str(prediction_id)}
        if owner_id is not None:
            query["owner_id"] = owner_id

        document = await self.db.find_one(self.COLLECTION_NAME, query)
        if document is None:
            return None
        return self._to_entity(document)

    async def find_by_owner(
        self, owner_id: str, skip: int = 0, limit: int = 100
    ) -> List[Prediction]:
        documents = await self.db.find_many(
            self.COLLECTION_NAME,
            {"owner_id": owner_id},
            sort_by="created_at",
            sort_direction=pymongo.DESCENDING,
            skip=skip,
            limit=limit,
        )
        return [self._to_entity(document) for document in documents]

    async def create(self, prediction: Prediction) -> Prediction:
        """
        Create a new prediction.

        Raises:
            PredictionOperationError: If the prediction creation fails
        """
        try:
            document = self._to_document(prediction)
            await self.db.insert_one(self.COLLECTION_NAME, document)
            return prediction
        except Exception as e:
            raise PredictionOperationError(
                f"Failed to create prediction: {str(e)}"
            ) from e

    async def update(self, prediction: Prediction) -> Prediction:
        """
        Update an existing prediction.

        Raises:
            PredictionNotFoundError: If the prediction does not exist
            PredictionOperationError: If the prediction update fails
        """
        try:
            document = self._to_document(prediction)
            await self.db.replace_one(
                self.COLLECTION_NAME, {"id": str(prediction.id)}, document
            )
            return prediction
        except DocumentNotFoundError as e:
            raise PredictionNotFoundError(str(prediction.id)) from e
        except Exception as e:
            raise PredictionOperationError(
                f"Failed to update prediction: {str(e)}"
            ) from e

    async def delete(self, prediction_id: UUID) -> None:
        """
        Delete a prediction by its ID.

        Raises:
            PredictionNotFoundError: If the prediction does not exist
            PredictionOperationError: If the prediction deletion fails
        """
        try:
            await self.db.delete_one(self.COLLECTION_NAME, {"id": str(prediction_id)})
        except DocumentNotFoundError as e:
            raise PredictionNotFoundError(str(prediction_id)) from e
        except Exception as e:
            raise PredictionOperationError(
                f"Failed to delete prediction: {str(e)}"
            ) from e
