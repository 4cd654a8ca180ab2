"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from campus_forecast.application.use_cases.prediction_orchestrator import (
    PredictionOrchestrator,
)
from campus_forecast.domain.services.period_calendar import PeriodCalendar
from campus_forecast.infrastructure.database import MongoDatabase
from campus_forecast.infrastructure.repositories.college_stats_repository import (
    CollegeStatsRepository,
)
from campus_forecast.infrastructure.repositories.prediction_repository import (
    PredictionRepository,
)
from campus_forecast.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    prediction_repository = providers.Singleton(
        PredictionRepository,
        mongo_database=mongo_database,
    )

    college_stats_repository = providers.Singleton(
        CollegeStatsRepository,
        mongo_database=mongo_database,
    )

    # Domain services
    period_calendar = providers.Singleton(PeriodCalendar)

    # Application (use cases)
    prediction_orchestrator = providers.Factory(
        PredictionOrchestrator,
        prediction_repository=prediction_repository,
        college_stats_repository=college_stats_repository,
        calendar=period_calendar,
        min_series_points=config.forecast.min_series_points,
        min_input_points=config.forecast.min_input_points,
        max_future_steps=config.forecast.max_future_steps,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Creates the MongoDB indexes on startup and closes the client on
    shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_indexes")
        await mongo_database.create_indexes()
        logger.info("container.resources.initialized")
        yield container
    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
