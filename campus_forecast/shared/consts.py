from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Forecast defaults, overridable through FORECAST_* settings.
DEFAULT_MIN_SERIES_POINTS = 3
DEFAULT_MIN_INPUT_POINTS = 2
DEFAULT_MAX_FUTURE_STEPS = 20

# The extrapolator needs at least one difference.
MIN_EXTRAPOLATION_POINTS = 2

OWNER_HEADER = "X-Owner-Id"
