"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides utilities, constants and enums used across
multiple layers of the application:
- Environment names and log levels
- Forecast defaults and the owner header name
- Logging configuration

It must not depend on Infrastructure or Frameworks.
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
