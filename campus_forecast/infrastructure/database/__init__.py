"""
Database package - Infrastructure Layer

This package contains database-related implementations for the forecasting
service: the MongoDB connection wrapper and the collection names it manages.
"""

from campus_forecast.infrastructure.database.mongo_database import (
    DatabaseWriteError,
    DocumentNotFoundError,
    MongoDatabase,
)

__all__ = ["MongoDatabase", "DocumentNotFoundError", "DatabaseWriteError"]
