# src/config/defaults.py
from typing import Dict, Any
from enum import Enum

class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

CONFIG_FILE_ENV_VAR = "ASG_AGE_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "aws": {
        "region": "us-east-1",
        "endpoint_url": None,
        "retry_attempts": 0,
        "connect_timeout_ms": 10000,
        "read_timeout_ms": 60000
    },
    "logging": {
        "level": "WARNING",
        "console_enabled": True,
        "file_path": None,
        "max_size_mb": 10,
        "backup_count": 5
    }
}

# Environment variables that override individual settings (highest priority
# after command line flags).
ENV_OVERRIDES = {
    "ASG_AGE_REGION": ("aws", "region"),
    "ASG_AGE_ENDPOINT_URL": ("aws", "endpoint_url"),
    "ASG_AGE_LOG_LEVEL": ("logging", "level"),
    "ASG_AGE_LOG_FILE": ("logging", "file_path"),
}
