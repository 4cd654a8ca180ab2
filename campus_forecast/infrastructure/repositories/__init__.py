"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. These implementations
handle the details of data persistence.
"""

from .college_stats_repository import CollegeStatsRepository
from .prediction_repository import PredictionRepository

__all__ = ["PredictionRepository", "CollegeStatsRepository"]
