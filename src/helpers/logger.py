import os
import logging
import sys
import structlog
from logging.handlers import RotatingFileHandler
from typing import Optional

from src.config.schemas.logging_schema import LoggingConfig
from src.domain.core.exceptions import ConfigurationError

LOGGER_NAME = "asg-instances-by-age"


class DetailedFormatter(logging.Formatter):
    """Formatter that adds ``module.function:line`` as ``caller_info``."""

    def format(self, record):
        record.caller_info = f"{record.module}.{record.funcName}:{record.lineno}"
        return super().format(record)


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> structlog.BoundLogger:
    """
    Set up structured logging for the application using structlog.

    Console records go to stderr so that standard output only carries the
    instance report.

    Args:
        logging_config: Logging configuration. If None, defaults are used.
    Returns:
        Configured structlog logger instance.
    Raises:
        ConfigurationError: If the log file cannot be opened
    """
    if logging_config is None:
        logging_config = LoggingConfig()

    handlers = []

    if logging_config.file_path:
        log_path = os.path.expandvars(logging_config.file_path)
        log_dir = os.path.dirname(log_path)
        try:
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=logging_config.max_size_mb * 1024 * 1024,
                backupCount=logging_config.backup_count
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file {log_path}: {e}")
        file_handler.setFormatter(DetailedFormatter(logging_config.format))
        handlers.append(file_handler)

    if logging_config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(DetailedFormatter(logging_config.format))
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, logging_config.level))

    # Remove any existing handlers and add new ones
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(LOGGER_NAME)
    logger.debug(
        "Logging configured",
        log_level=logging_config.level,
        log_file=logging_config.file_path
    )
    return logger


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
