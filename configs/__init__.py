"""Configuration module."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    ColorizeConfig,
    SensorConfig,
    TelemetryConfig,
    load_config,
)
from .validator import CONFIG_SCHEMA, validate_config

__all__ = [
    "AppConfig",
    "CONFIG_SCHEMA",
    "ColorizeConfig",
    "DEFAULT_CONFIG_PATH",
    "SensorConfig",
    "TelemetryConfig",
    "load_config",
    "validate_config",
]
