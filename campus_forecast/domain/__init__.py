"""
Domain Layer Package

This package contains the core forecasting logic of the application.
It defines entities, repository contracts and pure services without
dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from campus_forecast.domain import entities, repositories, services

__all__ = ["entities", "repositories", "services"]
