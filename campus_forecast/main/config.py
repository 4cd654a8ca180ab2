"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from campus_forecast.shared import EnumEnvironment, EnumLogLevel
from campus_forecast.shared.consts import (
    DEFAULT_MAX_FUTURE_STEPS,
    DEFAULT_MIN_INPUT_POINTS,
    DEFAULT_MIN_SERIES_POINTS,
)


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/campus_forecast",
        description="MongoDB connection URI",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
    )
    database_name: str = Field(
        default="campus_forecast", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class APISettings(BaseSettings):
    """HTTP API configuration settings."""

    title: str = Field(default="Campus Forecast", description="API title")
    description: str = Field(
        default="Forecasts of college revenue, expenses, profit and headcount",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class ForecastSettings(BaseSettings):
    """Thresholds of the forecasting engine."""

    min_series_points: int = Field(
        default=DEFAULT_MIN_SERIES_POINTS,
        ge=2,
        description="Minimum periods a series built from statistics must have",
    )
    min_input_points: int = Field(
        default=DEFAULT_MIN_INPUT_POINTS,
        ge=2,
        description="Minimum points a directly supplied series must have",
    )
    max_future_steps: int = Field(
        default=DEFAULT_MAX_FUTURE_STEPS,
        ge=1,
        description="Maximum number of periods that can be forecast",
    )

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
