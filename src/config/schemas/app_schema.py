"""Main application configuration schema."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .aws_schema import AWSConfig
from .logging_schema import LoggingConfig


class AppConfig(BaseModel):
    """Application configuration."""
    model_config = ConfigDict(extra="forbid")

    version: str = Field("1.0.0", description="Configuration version")
    aws: AWSConfig = Field(default_factory=AWSConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        return cls.model_validate(data)


def validate_config(config: Dict[str, Any]) -> AppConfig:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        Validated configuration

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return AppConfig.from_dict(config)
