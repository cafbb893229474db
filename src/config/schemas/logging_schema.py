"""Logging configuration schema."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config.defaults import LogLevel

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s"


class LoggingConfig(BaseModel):
    """Logging configuration.

    Console output always goes to stderr; stdout is reserved for results.
    """
    model_config = ConfigDict(extra="forbid")

    level: str = Field("WARNING", description="Log level")
    format: str = Field(DEFAULT_LOG_FORMAT, description="Log record format")
    console_enabled: bool = Field(True, description="Log to stderr")
    file_path: Optional[str] = Field(None, description="Optional log file path")
    max_size_mb: int = Field(10, ge=1, description="Rotate the log file at this size")
    backup_count: int = Field(5, ge=0, description="Rotated log files to keep")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the log level."""
        level = v.upper()
        if level not in LogLevel.__members__:
            raise ValueError(f"Invalid log level: {v}")
        return level
