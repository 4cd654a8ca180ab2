"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .college_stats_repository import ICollegeStatsRepository
from .prediction_repository import IPredictionRepository

__all__ = ["IPredictionRepository", "ICollegeStatsRepository"]
