"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the database.
"""

from campus_forecast.infrastructure import database, repositories

__all__ = ["database", "repositories"]
