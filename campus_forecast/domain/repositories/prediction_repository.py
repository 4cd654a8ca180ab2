"""
Prediction Repository Interface

This module defines the interface for prediction repositories following
the repository pattern. A prediction is stored together with its
observations and forecast points so that a write replaces all of them
at once.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from campus_forecast.domain.entities.prediction import Prediction


class IPredictionRepository(ABC):
    """Interface for Prediction repository implementations."""

    @abstractmethod
    async def find_by_id(
        self, prediction_id: UUID, owner_id: Optional[str] = None
    ) -> Optional[Prediction]:
        """
        Find a prediction by its ID.

        Args:
            prediction_id: The unique identifier of the prediction
            owner_id: When given, only a prediction of this owner matches

        Returns:
            The prediction if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_owner(
        self, owner_id: str, skip: int = 0, limit: int = 100
    ) -> List[Prediction]:
        """
        List the predictions of an owner, newest first.

        Args:
            owner_id: Owner whose predictions are listed
            skip: Number of records to skip (for pagination)
            limit: Maximum number of records to return

        Returns:
            List of predictions
        """
        pass

    @abstractmethod
    async def create(self, prediction: Prediction) -> Prediction:
        """
        Persist a new prediction with its observations and forecast points.

        Raises:
            PredictionOperationError: If the write fails
        """
        pass

    @abstractmethod
    async def update(self, prediction: Prediction) -> Prediction:
        """
        Replace a stored prediction with its children in a single write.

        Raises:
            PredictionNotFoundError: If the prediction does not exist
            PredictionOperationError: If the write fails
        """
        pass

    @abstractmethod
    async def delete(self, prediction_id: UUID) -> None:
        """
        Delete a prediction together with its observations and forecast points.

        Raises:
            PredictionNotFoundError: If the prediction does not exist
        """
        pass
