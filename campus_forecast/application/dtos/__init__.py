"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .prediction_dto import (
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

__all__ = [
    "SeriesPointInputDTO",
    "PredictionCreateDTO",
    "PredictionUpdateDTO",
    "ObservationDTO",
    "ForecastPointDTO",
    "LabeledPointDTO",
    "PredictionSummaryDTO",
    "PredictionResponseDTO",
    "AvailablePeriodsResponseDTO",
]
