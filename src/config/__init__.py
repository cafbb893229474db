"""Configuration package with clean public API."""

from .schemas import AppConfig, AWSConfig, LoggingConfig, validate_config
from .manager import ConfigurationManager

__all__ = [
    'AppConfig',
    'AWSConfig',
    'LoggingConfig',
    'validate_config',
    'ConfigurationManager',
]
