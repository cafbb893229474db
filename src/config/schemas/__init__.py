"""Configuration schemas."""

from .app_schema import AppConfig, validate_config
from .aws_schema import AWSConfig
from .logging_schema import DEFAULT_LOG_FORMAT, LoggingConfig

__all__ = [
    "AppConfig",
    "validate_config",
    "AWSConfig",
    "LoggingConfig",
    "DEFAULT_LOG_FORMAT",
]
